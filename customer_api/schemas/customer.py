"""Customer Schemas — public-facing customer rows, listing items and pagination.

Invariants:
    - CustomerDetail.address_count == len(CustomerDetail.addresses)
    - Pagination.total_pages == ceil(total / per_page) for a positive per_page
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from customer_api.schemas.address import AddressOut


class CustomerOut(BaseModel):
    """Customer row as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    phone_number: str
    email: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CustomerListItem(CustomerOut):
    """Listing row — aggregates over the customer's (filtered) addresses."""
    address_count: int = 0
    cities: list[str] = Field(default_factory=list)


class CustomerDetail(CustomerOut):
    """Single customer with every address attached."""
    addresses: list[AddressOut] = Field(default_factory=list)
    address_count: int = 0


class CustomerCreated(BaseModel):
    """Echo of a freshly created customer."""
    id: int
    first_name: str
    last_name: str
    phone_number: str
    email: str | None = None


class Pagination(BaseModel):
    current_page: int
    per_page: int
    total: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


class ListingFilters(BaseModel):
    search: str = ""
    city: str = ""
    state: str = ""
    pin_code: str = ""
    sort_by: str
    sort_order: str
