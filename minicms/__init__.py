"""
Mini CMS - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

import click
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from minicms.config import Config
from minicms.extensions import db, login_manager
from minicms.exceptions import CmsError

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    db.init_app(app)
    _init_auth(app)

    from minicms import middleware
    middleware.init_app(app)

    # Register blueprints
    from minicms.auth import auth_bp
    from minicms.admin import admin_bp
    from minicms.public import public_bp

    app.register_blueprint(auth_bp, url_prefix='/api')
    app.register_blueprint(admin_bp, url_prefix='/api/posts')
    app.register_blueprint(public_bp, url_prefix='/api/public')

    _register_error_handlers(app)
    _register_service_routes(app)
    _register_commands(app)

    # Create database tables
    with app.app_context():
        os.makedirs(app.instance_path, exist_ok=True)
        db.create_all()
        _log_boot(app)
    return app


def _init_auth(app):
    """Wire server-side sessions, the admin gate and Flask-Login together."""
    from flask import session
    from minicms.auth.credentials import AdminCredentials
    from minicms.auth.gate import AdminAuth
    from minicms.exceptions import Unauthorized
    from minicms.sessions import DatabaseSessionInterface, DatabaseSessionStore

    store = DatabaseSessionStore(db)
    app.session_interface = DatabaseSessionInterface(store, app.config['SESSION_LIFETIME'])

    credentials = AdminCredentials.from_config(app.config)
    admin_auth = AdminAuth(credentials, app.session_interface)
    app.extensions['admin_auth'] = admin_auth
    app.extensions['session_store'] = store

    login_manager.init_app(app)
    login_manager.session_protection = None

    @login_manager.request_loader
    def load_admin(request):
        return admin_auth.load_user(session)

    @login_manager.unauthorized_handler
    def unauthorized():
        raise Unauthorized()


def _register_error_handlers(app):

    @app.errorhandler(CmsError)
    def handle_cms_error(error):
        if error.status_code >= 500:
            logger.exception('Request failed: %s', error.message)
        else:
            logger.debug('Client error %s: %s', error.status_code, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify(ok=False, error=error.description or error.name), error.code


def _register_service_routes(app):

    @app.get('/')
    def index():
        return 'Mini CMS running', 200, {'Content-Type': 'text/plain; charset=utf-8'}

    @app.get('/health')
    def health():
        """Database probe; answers 200 even when the database is down"""
        from sqlalchemy.exc import SQLAlchemyError
        from minicms.services import check_database

        try:
            now = check_database()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.warning('Health check failed: %s', e)
            return jsonify(ok=False, db=False, error=str(getattr(e, 'orig', None) or e))
        return jsonify(ok=True, db=True, now=now)


def _register_commands(app):

    @app.cli.command('init-db')
    def init_db_command():
        """Create all tables and indexes."""
        db.create_all()
        click.echo('DB initialized')

    @app.cli.command('prune-sessions')
    def prune_sessions_command():
        """Delete expired session records."""
        removed = app.extensions['session_store'].prune_expired()
        click.echo(f'Removed {removed} expired sessions')


def _log_boot(app):
    credentials = app.extensions['admin_auth'].credentials
    logger.info('Mini CMS starting (APP_ENV=%s)', app.config['APP_ENV'])
    logger.info('Admin username: %s', credentials.username)
    logger.info('Database: %s', db.engine.url.render_as_string(hide_password=True))
    if not credentials.mode.is_hashed:
        logger.warning('ADMIN_PASSWORD is not a password hash, falling back to plain comparison')
