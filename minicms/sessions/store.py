"""
Session Store

Keyed, expiring storage of session records. The application only relies on
get / set / destroy, so any durable keyed store can stand in for the
relational one used here.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from minicms.models import UserSession

logger = logging.getLogger(__name__)


def _utcnow():
    return datetime.now(timezone.utc)


class SessionStore:
    """Capability interface for session persistence."""

    def get(self, sid):
        """Return the stored record for `sid`, or None when absent or expired."""
        raise NotImplementedError

    def set(self, sid, record, ttl):
        """Store `record` under `sid`, expiring `ttl` (a timedelta) from now."""
        raise NotImplementedError

    def destroy(self, sid):
        """Remove the record for `sid`; a missing record is not an error."""
        raise NotImplementedError


class DatabaseSessionStore(SessionStore):
    """Session store backed by the `user_sessions` table."""

    def __init__(self, db):
        self.db = db

    def get(self, sid):
        stmt = select(UserSession.sess).where(
            UserSession.sid == sid,
            UserSession.expire > _utcnow(),
        )
        try:
            record = self.db.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError:
            self.db.session.rollback()
            raise
        return dict(record) if record is not None else None

    def set(self, sid, record, ttl):
        row = UserSession(sid=sid, sess=dict(record), expire=_utcnow() + ttl)
        try:
            self.db.session.merge(row)
            self.db.session.commit()
        except SQLAlchemyError:
            self.db.session.rollback()
            raise

    def destroy(self, sid):
        try:
            self.db.session.execute(delete(UserSession).where(UserSession.sid == sid))
            self.db.session.commit()
        except SQLAlchemyError:
            self.db.session.rollback()
            raise

    def prune_expired(self):
        """Delete every expired record and return how many were removed."""
        try:
            result = self.db.session.execute(delete(UserSession).where(UserSession.expire <= _utcnow()))
            self.db.session.commit()
        except SQLAlchemyError:
            self.db.session.rollback()
            raise
        removed = result.rowcount or 0
        logger.info('Pruned %d expired sessions', removed)
        return removed
