"""
Models Package

Exports all models for easy importing.
"""

from minicms.models.post import Post, POST_STATUSES, STATUS_DRAFT, STATUS_PUBLISHED
from minicms.models.session import UserSession

__all__ = ['Post', 'UserSession', 'POST_STATUSES', 'STATUS_DRAFT', 'STATUS_PUBLISHED']
