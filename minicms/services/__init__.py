"""
Services Package

Exports all services for easy importing.
"""

from minicms.services.validation import normalize_post_input
from minicms.services.posts import (
    list_posts,
    get_post,
    create_post,
    update_post,
    publish_post,
    delete_post,
)
from minicms.services.health import check_database

__all__ = [
    'normalize_post_input',
    'list_posts',
    'get_post',
    'create_post',
    'update_post',
    'publish_post',
    'delete_post',
    'check_database',
]
