"""
Public Blueprint

Read-only feed of published posts, no authentication.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__)

from minicms.public import routes  # noqa: E402, F401
