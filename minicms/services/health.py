"""
Database health probe
"""

from sqlalchemy import text

from minicms.extensions import db


def check_database():
    """Round-trip to the database and return its current timestamp."""
    now = db.session.execute(text('SELECT CURRENT_TIMESTAMP')).scalar()
    return now.isoformat() if hasattr(now, 'isoformat') else str(now)
