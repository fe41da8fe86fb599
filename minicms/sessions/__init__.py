"""
Sessions Package

Server-side session records behind an opaque, signed cookie.
"""

from minicms.sessions.store import SessionStore, DatabaseSessionStore
from minicms.sessions.interface import ServerSideSession, DatabaseSessionInterface

__all__ = ['SessionStore', 'DatabaseSessionStore', 'ServerSideSession', 'DatabaseSessionInterface']
