"""
Admin Credentials

The admin secret is a werkzeug password hash, a bcrypt hash or, as an
insecure fallback, the plain password. Which one is decided once, at startup.
"""

import enum
import hmac
import logging
from dataclasses import dataclass, field

import bcrypt
from werkzeug.security import check_password_hash

logger = logging.getLogger(__name__)

# Prefixes written by werkzeug.security.generate_password_hash
WERKZEUG_PREFIXES = ('pbkdf2:', 'scrypt:')
BCRYPT_PREFIXES = ('$2a$', '$2b$', '$2y$')


class SecretMode(enum.Enum):
    PLAIN = 'plain'
    HASHED = 'hashed'
    BCRYPT = 'bcrypt'

    @classmethod
    def resolve(cls, secret):
        """Pick the mode from the format of the configured secret."""
        if secret and secret.startswith(WERKZEUG_PREFIXES):
            return cls.HASHED
        if secret and secret.startswith(BCRYPT_PREFIXES):
            return cls.BCRYPT
        return cls.PLAIN

    @property
    def is_hashed(self):
        return self is not SecretMode.PLAIN


def _check_bcrypt(secret, password):
    # $2y$ is the PHP name for the same algorithm as $2b$
    if secret.startswith('$2y$'):
        secret = '$2b$' + secret[4:]
    try:
        return bcrypt.checkpw(password.encode('utf-8'), secret.encode('utf-8'))
    except ValueError:
        logger.error('ADMIN_PASSWORD looks like bcrypt but is not a valid hash')
        return False


@dataclass(frozen=True)
class AdminCredentials:
    """Immutable admin login data handed to the auth gate."""

    username: str
    secret: str = field(repr=False)
    mode: SecretMode = SecretMode.PLAIN

    @classmethod
    def from_config(cls, config):
        secret = config['ADMIN_PASSWORD']
        return cls(
            username=config['ADMIN_USERNAME'],
            secret=secret,
            mode=SecretMode.resolve(secret),
        )

    def verify(self, username, password):
        """Return True when both username and password match."""
        if username != self.username:
            return False
        if self.mode is SecretMode.HASHED:
            return check_password_hash(self.secret, password)
        if self.mode is SecretMode.BCRYPT:
            return _check_bcrypt(self.secret, password)
        return hmac.compare_digest(password.encode('utf-8'), self.secret.encode('utf-8'))
