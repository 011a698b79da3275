"""Customer Listing Query — typed description of a filtered, sorted, paginated listing.

Invariants:
    - build_list_query is PURE: no SQL text, no IO — the store renders the result once
    - Only non-empty filter values become clauses (no match against "")
    - sort_by outside SortField falls back to SortField.ID, never an error
    - sort_order is DESC only when it upper-cases to "DESC"
    - page/limit are NOT bounds-checked; offset = (page - 1) * limit

Design Decisions:
    - Filters as a tuple of SubstringFilter values instead of string fragments:
      column choice lives in the store, values always travel as bind parameters
"""

import math
from dataclasses import dataclass

from customer_api.core.domain_types import FilterField, SortField, SortOrder

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class SubstringFilter:
    """One case-insensitive `%value%` match on a FilterField."""
    field: FilterField
    value: str

    @property
    def pattern(self) -> str:
        return f"%{self.value}%"


@dataclass(frozen=True)
class CustomerListQuery:
    """Everything needed to render the listing and its count statement."""
    page: int
    limit: int
    filters: tuple[SubstringFilter, ...]
    sort_by: SortField
    sort_order: SortOrder

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def filter_value(self, field: FilterField) -> str:
        for clause in self.filters:
            if clause.field is field:
                return clause.value
        return ""


def build_list_query(
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
    search: str | None = None,
    city: str | None = None,
    state: str | None = None,
    pin_code: str | None = None,
    sort_by: str | None = None,
    sort_order: str | None = None,
) -> CustomerListQuery:
    """Turn raw listing parameters into a CustomerListQuery."""
    raw_filters = (
        (FilterField.SEARCH, search),
        (FilterField.CITY, city),
        (FilterField.STATE, state),
        (FilterField.PIN_CODE, pin_code),
    )
    filters = tuple(
        SubstringFilter(field, value) for field, value in raw_filters if value
    )
    return CustomerListQuery(
        page=page,
        limit=limit,
        filters=filters,
        sort_by=resolve_sort_field(sort_by),
        sort_order=resolve_sort_order(sort_order),
    )


def resolve_sort_field(sort_by: str | None) -> SortField:
    try:
        return SortField(sort_by)
    except ValueError:
        return SortField.ID


def resolve_sort_order(sort_order: str | None) -> SortOrder:
    if sort_order and sort_order.upper() == SortOrder.DESC.value:
        return SortOrder.DESC
    return SortOrder.ASC


def paginate(total: int, page: int, limit: int) -> dict:
    """Pagination metadata for a listing page."""
    # limit == 0 would divide by zero; such a listing has no pages
    total_pages = math.ceil(total / limit) if limit else 0
    return {
        "current_page": page,
        "per_page": limit,
        "total": total,
        "total_pages": total_pages,
        "has_next_page": page < total_pages,
        "has_prev_page": page > 1,
    }


def describe_filters(query: CustomerListQuery) -> dict:
    """Echo of the effective filters, as returned alongside a listing."""
    return {
        "search": query.filter_value(FilterField.SEARCH),
        "city": query.filter_value(FilterField.CITY),
        "state": query.filter_value(FilterField.STATE),
        "pin_code": query.filter_value(FilterField.PIN_CODE),
        "sort_by": query.sort_by.value,
        "sort_order": query.sort_order.value,
    }
