"""
Session Model

Durable backing table for server-side login sessions.
"""

from minicms.extensions import db


class UserSession(db.Model):
    """One session record, keyed by the opaque id carried in the cookie"""
    __tablename__ = 'user_sessions'

    sid = db.Column(db.String(255), primary_key=True)
    sess = db.Column(db.JSON, nullable=False)
    expire = db.Column(db.DateTime(timezone=True), nullable=False, index=True)

    def __repr__(self):
        return f'<UserSession {self.sid[:8]} expires {self.expire}>'
