"""Address Validation — verifies the shared create/update validator.

Tests:
    - Five required fields (missing_fields map)
    - customer_id parsed to a positive int (int or digit string)
    - Length bounds for details, city, state, country
    - PIN code exactly 6 digits
    - country defaults to India, is_primary coerced to 0/1
"""

import pytest

from customer_api.core.domain_types import DEFAULT_COUNTRY
from customer_api.core.errors import (
    InvalidFormatError,
    InvalidLengthError,
    MissingFieldsError,
)
from customer_api.core.validate_address import validate_address


def _body(**overrides):
    return {
        "customer_id": 1,
        "address_details": "12 MG Road, Near Metro Station",
        "city": "Bengaluru",
        "state": "Karnataka",
        "pin_code": "560001",
        **overrides,
    }


def test_valid_address_gets_defaults():
    command = validate_address(_body())
    assert command.customer_id == 1
    assert command.country == DEFAULT_COUNTRY == "India"
    assert command.is_primary == 0


def test_text_fields_are_trimmed():
    command = validate_address(_body(
        address_details="  12 MG Road, Near Metro  ", city=" Pune ",
        state=" Maharashtra ", country=" Bharat ",
    ))
    assert command.address_details == "12 MG Road, Near Metro"
    assert command.city == "Pune"
    assert command.state == "Maharashtra"
    assert command.country == "Bharat"


def test_missing_fields_are_reported():
    with pytest.raises(MissingFieldsError) as exc_info:
        validate_address({"customer_id": 1, "city": "Pune"})
    err = exc_info.value
    assert err.message == (
        "Customer ID, address details, city, state, and PIN code are required"
    )
    assert err.missing_fields == {
        "customer_id": False,
        "address_details": True,
        "city": False,
        "state": True,
        "pin_code": True,
    }


def test_customer_id_digit_string_is_parsed():
    assert validate_address(_body(customer_id="42")).customer_id == 42


@pytest.mark.parametrize("customer_id", [-3, "-3", "abc", "12abc", "1.5", 2.5, 3.0, True])
def test_customer_id_must_be_positive_integer(customer_id):
    with pytest.raises(InvalidFormatError) as exc_info:
        validate_address(_body(customer_id=customer_id))
    assert exc_info.value.message == "Customer ID must be a positive integer"


def test_zero_customer_id_counts_as_missing():
    with pytest.raises(MissingFieldsError):
        validate_address(_body(customer_id=0))


@pytest.mark.parametrize("field,value,message", [
    ("address_details", "Too short", "Address details must be between 10 and 500 characters"),
    ("address_details", "x" * 501, "Address details must be between 10 and 500 characters"),
    ("city", "P", "City name must be between 2 and 100 characters"),
    ("state", "K" * 101, "State name must be between 2 and 100 characters"),
    ("country", "I", "Country name must be between 2 and 100 characters"),
])
def test_length_bounds(field, value, message):
    with pytest.raises(InvalidLengthError) as exc_info:
        validate_address(_body(**{field: value}))
    assert exc_info.value.message == message
    assert exc_info.value.field == field


@pytest.mark.parametrize("pin_code", ["56000", "5600011", "56O001"])
def test_pin_code_must_be_six_digits(pin_code):
    with pytest.raises(InvalidFormatError) as exc_info:
        validate_address(_body(pin_code=pin_code))
    assert exc_info.value.message == "PIN code must be exactly 6 digits"


def test_numeric_pin_code_is_accepted():
    assert validate_address(_body(pin_code=560001)).pin_code == "560001"


@pytest.mark.parametrize("flag,expected", [
    (1, 1), (0, 0), (True, 1), (False, 0), ("true", 1), ("0", 0), ("no", 0),
])
def test_is_primary_coerced(flag, expected):
    assert validate_address(_body(is_primary=flag)).is_primary == expected
