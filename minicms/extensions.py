"""
Flask Extensions

Admin authentication is session-based: the session record is the only
source of the logged-in identity, Flask-Login just exposes it per request.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance; rows stay loaded after commit so handlers serialize
# them without another round trip
db = SQLAlchemy(session_options={'expire_on_commit': False})

# Login manager, fed by a request loader reading the server-side session
login_manager = LoginManager()
