"""
Admin Decorator

Protected API routes are reachable only with a session that carries the
admin user claim.
"""

from functools import wraps

from flask_login import current_user, login_required

from minicms.auth.gate import ROLE_ADMIN
from minicms.exceptions import Unauthorized


def admin_required(f):
    """Decorator to ensure the request is from an authenticated admin.

    Anonymous callers are turned away by Flask-Login's unauthorized handler,
    which raises Unauthorized; a session with any other role gets the same.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if getattr(current_user, 'role', None) != ROLE_ADMIN:
            raise Unauthorized()
        return f(*args, **kwargs)
    return login_required(wrapper)
