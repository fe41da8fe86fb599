import pytest

from minicms.exceptions import ValidationError
from minicms.services import normalize_post_input


def test_valid_payload_is_trimmed():
    data = normalize_post_input({
        'title': '  Hallo  ',
        'category': ' News ',
        'post_date': ' 2024-03-01 ',
        'body': '\nInhalt\t',
        'status': ' Published ',
    })
    assert data == {
        'title': 'Hallo',
        'category': 'News',
        'post_date': '2024-03-01',
        'body': 'Inhalt',
        'status': 'published',
    }


def test_category_and_status_defaults():
    data = normalize_post_input({'title': 'a', 'post_date': '2024-01-01', 'body': 'b'})
    assert data['category'] == ''
    assert data['status'] == 'draft'


@pytest.mark.parametrize('status', ['archived', 'DELETED', 'publish', '   '])
def test_unknown_status_is_coerced_to_draft(status):
    data = normalize_post_input({'title': 'a', 'post_date': '2024-01-01', 'body': 'b', 'status': status})
    assert data['status'] == 'draft'


@pytest.mark.parametrize('payload, field, message', [
    ({}, 'title', 'Titel fehlt'),
    ({'title': '   ', 'post_date': '2024-01-01', 'body': 'x'}, 'title', 'Titel fehlt'),
    ({'title': 'a'}, 'post_date', 'Datum fehlt'),
    ({'title': 'a', 'body': 'x'}, 'post_date', 'Datum fehlt'),
    ({'title': 'a', 'post_date': '2024-01-01', 'body': ' '}, 'body', 'Text fehlt'),
])
def test_first_missing_field_is_reported(payload, field, message):
    with pytest.raises(ValidationError) as exc:
        normalize_post_input(payload)
    assert exc.value.field == field
    assert exc.value.message == message
    assert exc.value.status_code == 400


def test_none_payload_reports_title():
    with pytest.raises(ValidationError) as exc:
        normalize_post_input(None)
    assert exc.value.field == 'title'


def test_post_date_is_not_parsed():
    data = normalize_post_input({'title': 'a', 'post_date': 'gestern', 'body': 'b'})
    assert data['post_date'] == 'gestern'
