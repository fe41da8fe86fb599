"""
Post Validation

Normalizes untrusted post payloads before they reach storage.
"""

from minicms.exceptions import ValidationError
from minicms.models import POST_STATUSES, STATUS_DRAFT

# Checked in this order; the first missing one is reported
REQUIRED_FIELDS = (
    ('title', 'Titel fehlt'),
    ('post_date', 'Datum fehlt'),
    ('body', 'Text fehlt'),
)


def _clean(value):
    return str(value or '').strip()


def normalize_post_input(payload):
    """Return a normalized post record built from `payload`.

    All string fields are trimmed, category defaults to '' and an unknown
    status becomes draft. `post_date` stays text; the storage layer decides
    whether it is a valid date.

    Raises:
        ValidationError: naming the first missing required field
    """
    payload = payload or {}
    data = {
        'title': _clean(payload.get('title')),
        'category': _clean(payload.get('category')),
        'post_date': _clean(payload.get('post_date')),
        'body': _clean(payload.get('body')),
        'status': _clean(payload.get('status') or STATUS_DRAFT).lower(),
    }

    for field, message in REQUIRED_FIELDS:
        if not data[field]:
            raise ValidationError(field, message)

    if data['status'] not in POST_STATUSES:
        data['status'] = STATUS_DRAFT

    return data
