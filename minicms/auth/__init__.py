"""
Auth Blueprint

Single-admin login backed by a server-side session.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from minicms.auth import routes  # noqa: E402, F401
