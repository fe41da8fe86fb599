"""
Auth Routes

Admin login, logout and session introspection.
"""

from flask import jsonify, session
from flask_login import current_user

from minicms.auth import auth_bp
from minicms.auth.decorators import admin_required
from minicms.auth.gate import get_admin_auth
from minicms.utils import request_payload


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange admin credentials for a session cookie"""
    payload = request_payload()
    username = str(payload.get('username') or '').strip()
    password = str(payload.get('password') or '')

    user = get_admin_auth().login(session, username, password)
    return jsonify(ok=True, user=user.to_dict())


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Logout is idempotent: no session is still a success"""
    get_admin_auth().logout(session)
    return jsonify(ok=True)


@auth_bp.route('/me')
@admin_required
def me():
    return jsonify(ok=True, user=current_user.to_dict())
