"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CustomerId, AddressId wrap store-assigned integers
    - SortField is the allow-list for listing order; nothing else reaches ORDER BY
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (filters echo in listings)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CustomerId = NewType("CustomerId", int)
AddressId = NewType("AddressId", int)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_COUNTRY = "India"


# ─── Enums ───────────────────────────────────────────────────────

class SortField(str, Enum):
    """Customer columns a listing may be ordered by."""
    ID = "id"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    PHONE_NUMBER = "phone_number"
    CREATED_AT = "created_at"


class SortOrder(str, Enum):
    """Listing direction."""
    ASC = "ASC"
    DESC = "DESC"


class FilterField(str, Enum):
    """Listing filters — search spans customer columns, the rest the joined addresses."""
    SEARCH = "search"
    CITY = "city"
    STATE = "state"
    PIN_CODE = "pin_code"
