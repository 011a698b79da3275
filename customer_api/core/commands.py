"""Command Structs — validated, normalized input consumed by the resource handlers.

Invariants:
    - Only the validators in core/ construct these
    - Text fields are already trimmed; email is lower-cased or None
    - Frozen: handlers never patch a command after validation
"""

from dataclasses import dataclass, field

from customer_api.core.domain_types import DEFAULT_COUNTRY, CustomerId


@dataclass(frozen=True)
class CustomerCreateCommand:
    """Fields for a new customer row."""
    first_name: str
    last_name: str
    phone_number: str
    email: str | None = None


@dataclass(frozen=True)
class CustomerUpdateCommand:
    """Fields present in an update request.

    `fields` holds only the columns the client sent; an email of None
    clears the stored address.
    """
    fields: dict[str, str | None] = field(default_factory=dict)


@dataclass(frozen=True)
class AddressCommand:
    """Fields for an address insert or update.

    customer_id decides the owner on insert only; an update never moves an
    address to another customer.
    """
    customer_id: CustomerId
    address_details: str
    city: str
    state: str
    pin_code: str
    country: str = DEFAULT_COUNTRY
    is_primary: int = 0

    def as_update_row(self) -> dict:
        return {
            "address_details": self.address_details,
            "city": self.city,
            "state": self.state,
            "pin_code": self.pin_code,
            "country": self.country,
            "is_primary": self.is_primary,
        }

    def as_row(self) -> dict:
        return {"customer_id": self.customer_id, **self.as_update_row()}
