"""
Error taxonomy

Every error a handler can report to a caller derives from CmsError and
carries the HTTP status it is rendered with.
"""


class CmsError(Exception):
    """Base class for errors reported as `{ok: false, error: ...}`."""

    status_code = 500
    default_message = 'Interner Fehler'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {'ok': False, 'error': self.message}


class ValidationError(CmsError):
    """A required post field is missing."""

    status_code = 400

    def __init__(self, field, message):
        self.field = field
        super().__init__(message)

    def to_dict(self):
        data = super().to_dict()
        data['field'] = self.field
        return data


class InvalidIdError(CmsError):
    status_code = 400
    default_message = 'Ungültige ID'


class NotFoundError(CmsError):
    status_code = 404
    default_message = 'Nicht gefunden'


class Unauthorized(CmsError):
    status_code = 401
    default_message = 'Unauthorized'


class InvalidCredentials(CmsError):
    status_code = 401
    default_message = 'Ungültige Zugangsdaten'


class SessionError(CmsError):
    """The session could not be persisted during login."""

    status_code = 500
    default_message = 'Session konnte nicht gespeichert werden'


class StorageError(CmsError):
    """Any other failure of the backing store; carries the driver message."""

    status_code = 500


class InvalidDateError(StorageError):
    """The store rejected a post_date that is not a calendar date."""

    status_code = 400
