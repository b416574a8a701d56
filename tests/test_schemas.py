"""Request schema and error-message shaping.

Invariants:
    - Required fields reject missing, null, and empty values
    - Optional fields default to None
    - Validation errors collapse into a single {"error"} message
"""

import pytest
from pydantic import ValidationError

from guest_registry.config import Settings
from guest_registry.schemas.guest import GuestCreate
from guest_registry.utils.exceptions import validation_error_message


def _payload(**overrides):
    payload = {
        "line_user_id": "u1",
        "host_name": "Alice",
        "first_name": "Bob",
        "last_name": "Lee",
        "date": "2024-06-01",
    }
    payload.update(overrides)
    return payload


def test_optional_fields_default_to_none():
    guest = GuestCreate(**_payload())
    assert guest.phone is None
    assert guest.arrival_time is None


def test_date_is_kept_as_raw_string():
    guest = GuestCreate(**_payload(date="2024-1-1"))
    assert guest.date == "2024-1-1"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_required_field_rejects_null_empty_and_blank(value):
    with pytest.raises(ValidationError):
        GuestCreate(**_payload(host_name=value))


def test_required_field_keeps_surrounding_spaces():
    guest = GuestCreate(**_payload(host_name=" Alice "))
    assert guest.host_name == " Alice "


# --- validation_error_message -------------------------------------------------

def test_message_lists_missing_body_fields():
    errors = [
        {"type": "missing", "loc": ("body", "host_name"), "msg": "Field required"},
        {"type": "string_too_short", "loc": ("body", "date"), "msg": "String should have at least 1 character"},
    ]
    assert validation_error_message(errors) == "Missing required fields: host_name, date."


def test_message_counts_null_string_as_missing():
    errors = [
        {"type": "string_type", "loc": ("body", "first_name"), "msg": "Input should be a valid string", "input": None},
    ]
    assert validation_error_message(errors) == "Missing required fields: first_name."


def test_message_reports_wrong_type_as_invalid():
    errors = [
        {"type": "string_type", "loc": ("body", "phone"), "msg": "Input should be a valid string", "input": 812345678},
    ]
    assert validation_error_message(errors) == (
        "Invalid request: body.phone: Input should be a valid string"
    )


def test_message_falls_back_to_details_for_other_errors():
    errors = [
        {"type": "int_parsing", "loc": ("path", "guest_id"), "msg": "Input should be a valid integer"},
    ]
    assert validation_error_message(errors) == (
        "Invalid request: path.guest_id: Input should be a valid integer"
    )


# --- settings -----------------------------------------------------------------

def test_postgres_scheme_is_normalised():
    settings = Settings(database_url="postgres://user:pw@db:5432/guests", _env_file=None)
    assert settings.database_url == "postgresql://user:pw@db:5432/guests"


def test_sqlite_url_is_untouched():
    settings = Settings(database_url="sqlite:///./guests.db", _env_file=None)
    assert settings.database_url == "sqlite:///./guests.db"
