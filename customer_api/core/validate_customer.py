"""Customer Validation — checks and normalizes customer field sets before they reach the store.

Invariants:
    - validate_* are PURE: take the raw JSON object, return a frozen command or raise
    - Names are 2–50 chars after trimming; phone is exactly 10 ASCII digits
    - Email, when present, matches local@domain.tld and is stored lower-cased
    - Update requires at least one truthy field; every key that IS present is validated

Design Decisions:
    - Presence is a truthiness check (empty string counts as missing) for create,
      and for the "no fields" check on update
    - Phone numbers are string-coerced so a JSON number of 10 digits is accepted
"""

import re
from typing import Any

from customer_api.core.commands import CustomerCreateCommand, CustomerUpdateCommand
from customer_api.core.errors import (
    InvalidFormatError,
    InvalidLengthError,
    MissingFieldsError,
    NoFieldsProvidedError,
)

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PHONE_PATTERN = re.compile(r"[0-9]{10}")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

UPDATABLE_FIELDS = ("first_name", "last_name", "phone_number", "email")


def validate_customer_create(body: dict[str, Any]) -> CustomerCreateCommand:
    """Validate a create request. All of first_name, last_name, phone_number required."""
    first_name = body.get("first_name")
    last_name = body.get("last_name")
    phone_number = body.get("phone_number")
    email = body.get("email")

    if not first_name or not last_name or not phone_number:
        raise MissingFieldsError(
            "First name, last name, and phone number are required",
            missing_fields={
                "first_name": not first_name,
                "last_name": not last_name,
                "phone_number": not phone_number,
            },
        )

    return CustomerCreateCommand(
        first_name=_check_name(first_name, "first_name", "First name"),
        last_name=_check_name(last_name, "last_name", "Last name"),
        phone_number=_check_phone(phone_number),
        email=_check_email(email) if email else None,
    )


def validate_customer_update(body: dict[str, Any]) -> CustomerUpdateCommand:
    """Validate an update request. Only fields present in the body are carried."""
    if not any(body.get(name) for name in UPDATABLE_FIELDS):
        raise NoFieldsProvidedError(
            "At least one field (first_name, last_name, phone_number, email) "
            "must be provided for update",
        )

    fields: dict[str, str | None] = {}
    if "first_name" in body:
        fields["first_name"] = _check_name(body["first_name"], "first_name", "First name")
    if "last_name" in body:
        fields["last_name"] = _check_name(body["last_name"], "last_name", "Last name")
    if "phone_number" in body:
        fields["phone_number"] = _check_phone(body["phone_number"])
    if "email" in body:
        # "" (or null) clears the stored email
        email = body["email"]
        fields["email"] = None if email in ("", None) else _check_email(email)

    return CustomerUpdateCommand(fields=fields)


# ─── Field checks ────────────────────────────────────────────────

def _check_name(value: Any, field: str, label: str) -> str:
    if not isinstance(value, str):
        raise InvalidLengthError(
            f"{label} must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
            field,
        )
    trimmed = value.strip()
    if not NAME_MIN_LENGTH <= len(trimmed) <= NAME_MAX_LENGTH:
        raise InvalidLengthError(
            f"{label} must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
            field,
        )
    return trimmed


def _check_phone(value: Any) -> str:
    phone = "" if isinstance(value, bool) else str(value).strip()
    if not PHONE_PATTERN.fullmatch(phone):
        raise InvalidFormatError(
            "Phone number must be exactly 10 digits", "phone_number",
        )
    return phone


def _check_email(value: Any) -> str:
    if not isinstance(value, str) or not EMAIL_PATTERN.fullmatch(value.strip()):
        raise InvalidFormatError(
            "Please provide a valid email address", "email",
        )
    return value.strip().lower()
