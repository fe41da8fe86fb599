"""
Request helpers shared by the API blueprints
"""

from flask import request

from minicms.exceptions import InvalidIdError


def request_payload():
    """JSON object body of the request, falling back to form data."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


def parse_post_id(raw):
    """Parse a path id; only positive integers are accepted.

    Raises:
        InvalidIdError: before any storage access, for anything else
    """
    text = str(raw).strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidIdError()
    post_id = int(text)
    if post_id <= 0:
        raise InvalidIdError()
    return post_id
