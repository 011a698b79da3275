"""Address Validation — checks and normalizes address field sets for create and update.

Invariants:
    - validate_address is PURE: raw JSON object in, frozen AddressCommand out (or raise)
    - customer_id must be a positive integer (int, or a string of digits)
    - address_details 10–500 chars, city/state/country 2–100 chars, pin_code exactly 6 digits
    - country defaults to DEFAULT_COUNTRY, is_primary to 0

Design Decisions:
    - One validator for both create and update: the create route used to run a
      narrower presence-only check, which let malformed rows through
"""

import re
from typing import Any

from customer_api.core.commands import AddressCommand
from customer_api.core.domain_types import DEFAULT_COUNTRY, CustomerId
from customer_api.core.errors import (
    InvalidFormatError,
    InvalidLengthError,
    MissingFieldsError,
)

REQUIRED_FIELDS = ("customer_id", "address_details", "city", "state", "pin_code")
PIN_CODE_PATTERN = re.compile(r"[0-9]{6}")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
TRUTHY_FLAGS = ("1", "true", "yes")


def validate_address(body: dict[str, Any]) -> AddressCommand:
    """Validate an address create/update request."""
    if not all(body.get(name) for name in REQUIRED_FIELDS):
        raise MissingFieldsError(
            "Customer ID, address details, city, state, and PIN code are required",
            missing_fields={name: not body.get(name) for name in REQUIRED_FIELDS},
        )

    customer_id = _parse_customer_id(body["customer_id"])
    address_details = _check_text(
        body["address_details"], 10, 500, "address_details", "Address details",
    )
    city = _check_text(body["city"], 2, 100, "city", "City name")
    state = _check_text(body["state"], 2, 100, "state", "State name")
    pin_code = _check_pin_code(body["pin_code"])

    country = body.get("country")
    country = (
        _check_text(country, 2, 100, "country", "Country name")
        if country else DEFAULT_COUNTRY
    )

    return AddressCommand(
        customer_id=customer_id,
        address_details=address_details,
        city=city,
        state=state,
        pin_code=pin_code,
        country=country,
        is_primary=_coerce_flag(body.get("is_primary", 0)),
    )


def _parse_customer_id(value: Any) -> CustomerId:
    parsed: int | None = None
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    elif isinstance(value, str) and INTEGER_PATTERN.fullmatch(value.strip()):
        parsed = int(value.strip())

    if parsed is None or parsed <= 0:
        raise InvalidFormatError(
            "Customer ID must be a positive integer", "customer_id",
        )
    return CustomerId(parsed)


def _check_text(value: Any, min_length: int, max_length: int, field: str, label: str) -> str:
    if not isinstance(value, str) or not min_length <= len(value.strip()) <= max_length:
        raise InvalidLengthError(
            f"{label} must be between {min_length} and {max_length} characters",
            field,
        )
    return value.strip()


def _check_pin_code(value: Any) -> str:
    pin_code = "" if isinstance(value, bool) else str(value).strip()
    if not PIN_CODE_PATTERN.fullmatch(pin_code):
        raise InvalidFormatError("PIN code must be exactly 6 digits", "pin_code")
    return pin_code


def _coerce_flag(value: Any) -> int:
    if isinstance(value, str):
        return 1 if value.strip().lower() in TRUTHY_FLAGS else 0
    return 1 if value else 0
