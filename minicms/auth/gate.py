"""
Auth Gate

Decides who the caller is from the server-side session and performs the
login / logout protocol for the single admin account.
"""

import logging

from flask import current_app
from flask_login import UserMixin
from sqlalchemy.exc import SQLAlchemyError

from minicms.exceptions import InvalidCredentials, SessionError

logger = logging.getLogger(__name__)

ROLE_ADMIN = 'admin'


class AdminUser(UserMixin):
    """Authenticated identity as stored in the session record"""

    def __init__(self, username, role=ROLE_ADMIN):
        self.username = username
        self.role = role

    def get_id(self):
        return self.username

    def to_dict(self):
        return {'username': self.username, 'role': self.role}

    def __repr__(self):
        return f'<AdminUser {self.username} ({self.role})>'


class AdminAuth:
    """Login, logout and per-request identity for the admin.

    Args:
        credentials: AdminCredentials resolved at startup
        session_interface: DatabaseSessionInterface used to regenerate,
            persist and destroy session records
    """

    def __init__(self, credentials, session_interface):
        self.credentials = credentials
        self.session_interface = session_interface

    def login(self, session, username, password):
        """Verify credentials and bind a fresh session to the admin.

        Raises:
            InvalidCredentials: username or password do not match
            SessionError: the new session could not be stored
        """
        if not self.credentials.verify(username, password):
            logger.warning('Rejected admin login for username %r', username)
            raise InvalidCredentials()

        user = AdminUser(self.credentials.username)
        try:
            self.session_interface.regenerate(session)
            session['user'] = user.to_dict()
            self.session_interface.persist(session)
        except SQLAlchemyError as e:
            logger.exception('Could not establish admin session')
            self.session_interface.discard(session)
            raise SessionError() from e

        logger.info('Admin %s logged in', user.username)
        return user

    def logout(self, session):
        """Destroy the session, if there is one."""
        try:
            self.session_interface.destroy(session)
        except SQLAlchemyError as e:
            logger.exception('Could not destroy session')
            raise SessionError('Logout fehlgeschlagen') from e

    def load_user(self, session):
        """Return the AdminUser recorded in `session`, or None."""
        record = session.get('user')
        if not isinstance(record, dict) or not record.get('username'):
            return None
        return AdminUser(record['username'], record.get('role', ROLE_ADMIN))


def get_admin_auth():
    """The AdminAuth registered on the current application."""
    return current_app.extensions['admin_auth']
