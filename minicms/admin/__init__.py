"""
Admin Blueprint

Session-protected management API for posts.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from minicms.admin import routes  # noqa: E402, F401
