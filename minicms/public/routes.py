"""
Public Routes

Drafts are invisible here, even by id: they answer 404 like a missing post.
"""

from flask import jsonify

from minicms.public import public_bp
from minicms.services import get_post, list_posts
from minicms.utils import parse_post_id


@public_bp.route('/posts')
def feed():
    items = [post.to_dict(include_status=False) for post in list_posts(published_only=True)]
    return jsonify(ok=True, items=items)


@public_bp.route('/posts/<post_id>')
def detail(post_id):
    post = get_post(parse_post_id(post_id), published_only=True)
    return jsonify(ok=True, item=post.to_dict(include_status=False))
