"""
Request/response hooks

CORS for the allow-listed frontend origins, with credentials so the
session cookie travels along.
"""

from flask import current_app, request

CORS_HEADERS = {
    'Access-Control-Allow-Credentials': 'true',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'GET,POST,PUT,DELETE,OPTIONS',
}


def answer_preflight():
    """Short-circuit every OPTIONS request with 204 before routing."""
    if request.method == 'OPTIONS':
        return current_app.response_class(status=204)
    return None


def apply_cors_headers(response):
    origin = request.headers.get('Origin')
    if origin and origin in current_app.config['CORS_ALLOWED_ORIGINS']:
        response.headers['Access-Control-Allow-Origin'] = origin
        response.vary.add('Origin')
        response.headers.update(CORS_HEADERS)
    return response


def init_app(app):
    app.before_request(answer_preflight)
    app.after_request(apply_cors_headers)
