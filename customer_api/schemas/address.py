"""Address Schemas — public-facing address rows."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AddressOut(BaseModel):
    """Address row as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: int
    address_details: str
    city: str
    state: str
    pin_code: str
    country: str
    is_primary: int
    created_at: datetime | None = None


class AddressCreated(BaseModel):
    id: int
