"""
Server-side Session Interface

Replaces Flask's signed-cookie sessions: the cookie only carries a signed,
random session id, the data lives in a SessionStore.
"""

import logging
import secrets

from flask.sessions import SessionInterface, SessionMixin
from itsdangerous import BadSignature, Signer
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import CallbackDict

logger = logging.getLogger(__name__)


class ServerSideSession(CallbackDict, SessionMixin):
    """Session data plus the id it is stored under."""

    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False
        self.destroyed = False


class DatabaseSessionInterface(SessionInterface):
    """Flask session interface persisting sessions through a SessionStore.

    Args:
        store: object implementing get / set / destroy
        lifetime: timedelta after which a stored session expires
    """

    session_class = ServerSideSession
    salt = 'minicms-session'

    def __init__(self, store, lifetime):
        self.store = store
        self.lifetime = lifetime

    def _signer(self, app):
        if not app.secret_key:
            return None
        return Signer(app.secret_key, salt=self.salt, key_derivation='hmac')

    @staticmethod
    def _generate_sid():
        return secrets.token_urlsafe(32)

    def _unsign(self, signer, cookie):
        try:
            return signer.unsign(cookie).decode('utf-8')
        except BadSignature:
            logger.debug('Rejected session cookie with a bad signature')
            return None

    def open_session(self, app, request):
        signer = self._signer(app)
        if signer is None:
            return None

        cookie = request.cookies.get(self.get_cookie_name(app))
        sid = self._unsign(signer, cookie) if cookie else None
        if sid:
            try:
                record = self.store.get(sid)
            except SQLAlchemyError:
                logger.exception('Could not load session record, continuing anonymously')
                record = None
            if record is not None:
                return self.session_class(record, sid=sid)

        return self.session_class(sid=self._generate_sid(), new=True)

    def regenerate(self, session):
        """Drop the current record and move the session to a fresh id."""
        if not session.new:
            self.store.destroy(session.sid)
        session.clear()
        session.sid = self._generate_sid()
        session.new = True

    def persist(self, session):
        """Write the session record now instead of at the end of the request."""
        self.store.set(session.sid, dict(session), self.lifetime)
        session.modified = False

    def destroy(self, session):
        """Remove the stored record and empty the session."""
        if not session.new:
            self.store.destroy(session.sid)
        session.clear()
        session.destroyed = True

    def discard(self, session):
        """Forget the session locally without touching the store."""
        session.clear()
        session.destroyed = True

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if session.destroyed:
            response.delete_cookie(name, domain=domain, path=path)
            return

        if not session:
            if session.modified and not session.new:
                self.store.destroy(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if session.modified:
            self.persist(session)

        if session.new:
            signed = self._signer(app).sign(session.sid.encode('utf-8')).decode('utf-8')
            response.set_cookie(
                name,
                signed,
                max_age=int(self.lifetime.total_seconds()),
                httponly=self.get_cookie_httponly(app),
                secure=self.get_cookie_secure(app),
                samesite=self.get_cookie_samesite(app),
                domain=domain,
                path=path,
            )
            session.new = False
