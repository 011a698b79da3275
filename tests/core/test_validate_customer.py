"""Customer Validation — verifies create/update checks and normalization.

Tests:
    - Create requires first_name, last_name, phone_number (missing_fields map)
    - Name length bounds apply after trimming
    - Phone is string-coerced and must be exactly 10 digits
    - Email is optional, pattern-checked, lower-cased
    - Update requires at least one field; present fields use the create rules
    - Update with email "" clears the stored email
"""

import pytest

from customer_api.core.commands import CustomerCreateCommand
from customer_api.core.errors import (
    InvalidFormatError,
    InvalidLengthError,
    MissingFieldsError,
    NoFieldsProvidedError,
)
from customer_api.core.validate_customer import (
    validate_customer_create,
    validate_customer_update,
)


def _body(**overrides):
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "phone_number": "9876543210",
        **overrides,
    }


# ─── Create ──────────────────────────────────────────────────────

def test_create_returns_normalized_command():
    command = validate_customer_create(_body(
        first_name="  Jane ", last_name=" Doe", phone_number=" 9876543210 ",
        email="  Jane.Doe@Ex.com ",
    ))
    assert command == CustomerCreateCommand(
        first_name="Jane", last_name="Doe",
        phone_number="9876543210", email="jane.doe@ex.com",
    )


def test_create_without_email_yields_none():
    assert validate_customer_create(_body()).email is None
    assert validate_customer_create(_body(email="")).email is None


def test_create_missing_fields_reports_each_one():
    with pytest.raises(MissingFieldsError) as exc_info:
        validate_customer_create({"first_name": "Jane"})
    err = exc_info.value
    assert err.message == "First name, last name, and phone number are required"
    assert err.missing_fields == {
        "first_name": False, "last_name": True, "phone_number": True,
    }
    assert err.http_status == 400


def test_create_empty_string_counts_as_missing():
    with pytest.raises(MissingFieldsError):
        validate_customer_create(_body(last_name=""))


@pytest.mark.parametrize("name", ["J", " J ", "x" * 51])
def test_create_rejects_first_name_out_of_bounds(name):
    with pytest.raises(InvalidLengthError) as exc_info:
        validate_customer_create(_body(first_name=name))
    assert exc_info.value.message == "First name must be between 2 and 50 characters"
    assert exc_info.value.field == "first_name"


def test_create_rejects_short_last_name():
    with pytest.raises(InvalidLengthError) as exc_info:
        validate_customer_create(_body(last_name="D"))
    assert exc_info.value.message == "Last name must be between 2 and 50 characters"


def test_create_accepts_name_bounds():
    command = validate_customer_create(_body(first_name="Jo", last_name="x" * 50))
    assert command.first_name == "Jo"
    assert len(command.last_name) == 50


@pytest.mark.parametrize("phone", ["123", "98765432101", "98765abcde", "+919876543"])
def test_create_rejects_bad_phone(phone):
    with pytest.raises(InvalidFormatError) as exc_info:
        validate_customer_create(_body(phone_number=phone))
    assert exc_info.value.message == "Phone number must be exactly 10 digits"


def test_create_coerces_numeric_phone_to_string():
    assert validate_customer_create(_body(phone_number=9876543210)).phone_number == "9876543210"


@pytest.mark.parametrize("email", ["plain", "a@b", "a b@c.com", "@ex.com"])
def test_create_rejects_bad_email(email):
    with pytest.raises(InvalidFormatError) as exc_info:
        validate_customer_create(_body(email=email))
    assert exc_info.value.message == "Please provide a valid email address"


# ─── Update ──────────────────────────────────────────────────────

def test_update_requires_at_least_one_field():
    with pytest.raises(NoFieldsProvidedError) as exc_info:
        validate_customer_update({})
    assert exc_info.value.message == (
        "At least one field (first_name, last_name, phone_number, email) "
        "must be provided for update"
    )


def test_update_ignores_unknown_fields_for_presence():
    with pytest.raises(NoFieldsProvidedError):
        validate_customer_update({"nickname": "JD"})


def test_update_carries_only_present_fields():
    command = validate_customer_update({"first_name": "  Janet "})
    assert command.fields == {"first_name": "Janet"}


def test_update_validates_present_fields():
    with pytest.raises(InvalidFormatError):
        validate_customer_update({"first_name": "Janet", "phone_number": "12"})


def test_update_normalizes_email():
    command = validate_customer_update({"email": "NEW@Example.COM"})
    assert command.fields == {"email": "new@example.com"}


def test_update_empty_email_clears_field():
    command = validate_customer_update({"first_name": "Janet", "email": ""})
    assert command.fields == {"first_name": "Janet", "email": None}
