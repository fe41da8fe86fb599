"""
Configuration settings for the Mini CMS backend
"""
import os
from datetime import timedelta


def _database_url(default):
    url = os.environ.get('DATABASE_URL') or default
    # Hosting providers still hand out the legacy scheme
    if url.startswith('postgres://'):
        url = url.replace('postgres://', 'postgresql+psycopg2://', 1)
    return url


def _split_origins(value):
    return tuple(o.strip() for o in (value or '').split(',') if o.strip())


class Config:
    """Flask application configuration"""

    APP_ENV = os.environ.get('APP_ENV') or 'development'

    # Signs the session cookie
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = _database_url('sqlite:///' + os.path.join(basedir, 'instance', 'minicms.db'))
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_pre_ping': True, 'pool_recycle': 300}

    # Admin credentials: plain text or a werkzeug password hash
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'

    # Server-side sessions
    SESSION_COOKIE_NAME = os.environ.get('SESSION_COOKIE_NAME') or 'minicms.sid'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = APP_ENV == 'production'
    SESSION_LIFETIME = timedelta(hours=8)

    CORS_ALLOWED_ORIGINS = _split_origins(os.environ.get('CORS_ALLOWED_ORIGINS'))

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class ProductionConfig(Config):
    """Production configuration"""
    APP_ENV = 'production'
    SESSION_COOKIE_SECURE = True


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    APP_ENV = 'test'
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    ADMIN_USERNAME = 'admin'
    ADMIN_PASSWORD = 'admin123'
    SESSION_COOKIE_SECURE = False
    CORS_ALLOWED_ORIGINS = ('https://frontend.example',)
