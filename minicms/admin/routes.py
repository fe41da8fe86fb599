"""
Admin Routes

CRUD endpoints for posts. Every route requires the admin session; ids are
validated before storage is touched.
"""

from flask import jsonify

from minicms.admin import admin_bp
from minicms.auth.decorators import admin_required
from minicms.services import (
    create_post,
    delete_post,
    get_post,
    list_posts,
    normalize_post_input,
    publish_post,
    update_post,
)
from minicms.utils import parse_post_id, request_payload


@admin_bp.route('', methods=['GET'])
@admin_required
def list_all():
    """All posts regardless of status, newest first"""
    items = [post.to_dict() for post in list_posts()]
    return jsonify(ok=True, items=items)


@admin_bp.route('/<post_id>', methods=['GET'])
@admin_required
def detail(post_id):
    post = get_post(parse_post_id(post_id))
    return jsonify(ok=True, item=post.to_dict())


@admin_bp.route('', methods=['POST'])
@admin_required
def create():
    data = normalize_post_input(request_payload())
    post = create_post(data)
    return jsonify(ok=True, item=post.to_dict())


@admin_bp.route('/<post_id>', methods=['PUT'])
@admin_required
def replace(post_id):
    """Full replace: every mutable field has to be sent again"""
    post_id = parse_post_id(post_id)
    data = normalize_post_input(request_payload())
    post = update_post(post_id, data)
    return jsonify(ok=True, item=post.to_dict())


@admin_bp.route('/<post_id>/publish', methods=['POST'])
@admin_required
def publish(post_id):
    post = publish_post(parse_post_id(post_id))
    return jsonify(ok=True, item=post.to_dict())


@admin_bp.route('/<post_id>', methods=['DELETE'])
@admin_required
def remove(post_id):
    deleted_id = delete_post(parse_post_id(post_id))
    return jsonify(ok=True, deletedId=deleted_id)
