"""Customer Routes — listing, detail, create, update, delete, and the customer's addresses.

Invariants:
    - Mutating routes run the validation layer before touching the store
    - Each handler: at most one validation, one-or-two store calls, one response shape
    - Zero affected rows on update/delete → 404; the store is never retried
"""

import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from customer_api.api.dependencies import get_address_store, get_customer_store
from customer_api.core.customer_query import (
    DEFAULT_LIMIT, DEFAULT_PAGE, build_list_query, describe_filters, paginate,
)
from customer_api.core.domain_types import CustomerId
from customer_api.core.errors import ErrorContext, ResourceNotFoundError
from customer_api.core.repository_protocols import AddressRepository, CustomerRepository
from customer_api.core.validate_customer import (
    validate_customer_create, validate_customer_update,
)
from customer_api.schemas.address import AddressOut
from customer_api.schemas.customer import (
    CustomerCreated, CustomerDetail, CustomerListItem, ListingFilters, Pagination,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/customers", tags=["customers"])


def _not_found(customer_id: int) -> ResourceNotFoundError:
    return ResourceNotFoundError("Customer", ErrorContext(customer_id=customer_id))


@router.get("")
async def list_customers(
    page: int = Query(DEFAULT_PAGE),
    limit: int = Query(DEFAULT_LIMIT),
    search: str = Query(""),
    city: str = Query(""),
    state: str = Query(""),
    pin_code: str = Query(""),
    sort_by: str = Query("id"),
    sort_order: str = Query("ASC"),
    customers: CustomerRepository = Depends(get_customer_store),
):
    """Filtered, sorted, paginated customer listing."""
    query = build_list_query(
        page=page, limit=limit, search=search, city=city, state=state,
        pin_code=pin_code, sort_by=sort_by, sort_order=sort_order,
    )
    rows, total = await customers.list_page(query)
    return {
        "success": True,
        "data": [CustomerListItem.model_validate(row) for row in rows],
        "pagination": Pagination(**paginate(total, query.page, query.limit)),
        "filters": ListingFilters(**describe_filters(query)),
    }


@router.get("/{customer_id}")
async def get_customer(
    customer_id: int,
    customers: CustomerRepository = Depends(get_customer_store),
    addresses: AddressRepository = Depends(get_address_store),
):
    """Customer with all of its addresses."""
    customer = await customers.get(CustomerId(customer_id))
    if customer is None:
        raise _not_found(customer_id)

    rows = await addresses.list_for_customer(CustomerId(customer_id))
    return {
        "success": True,
        "data": CustomerDetail(
            **customer,
            addresses=[AddressOut.model_validate(row) for row in rows],
            address_count=len(rows),
        ),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_customer(
    body: dict[str, Any] = Body(...),
    customers: CustomerRepository = Depends(get_customer_store),
):
    command = validate_customer_create(body)
    customer_id = await customers.create(command)
    logger.info("Customer created", extra={"customer_id": customer_id})
    return {
        "success": True,
        "message": "Customer created successfully",
        "data": CustomerCreated(id=customer_id, **asdict(command)),
    }


@router.put("/{customer_id}")
async def update_customer(
    customer_id: int,
    body: dict[str, Any] = Body(...),
    customers: CustomerRepository = Depends(get_customer_store),
):
    """Write the fields present in the body; updated_at always refreshed."""
    command = validate_customer_update(body)
    affected = await customers.update(CustomerId(customer_id), command)
    if affected == 0:
        raise _not_found(customer_id)
    logger.info("Customer updated", extra={"customer_id": customer_id})
    return {"success": True, "message": "Customer updated successfully"}


@router.delete("/{customer_id}")
async def delete_customer(
    customer_id: int,
    customers: CustomerRepository = Depends(get_customer_store),
):
    affected = await customers.delete(CustomerId(customer_id))
    if affected == 0:
        raise _not_found(customer_id)
    logger.info("Customer deleted", extra={"customer_id": customer_id})
    return {"success": True, "message": "Customer deleted successfully"}


@router.get("/{customer_id}/addresses")
async def list_customer_addresses(
    customer_id: int,
    addresses: AddressRepository = Depends(get_address_store),
):
    rows = await addresses.list_for_customer(CustomerId(customer_id))
    return {
        "success": True,
        "data": [AddressOut.model_validate(row) for row in rows],
    }
