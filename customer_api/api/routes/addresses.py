"""Address Routes — per-customer listing, create, update, delete.

Invariants:
    - Create and update both go through validate_address
    - Listing by customer returns primary addresses first, then oldest first
    - Zero affected rows on update/delete → 404
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status

from customer_api.api.dependencies import get_address_store
from customer_api.core.domain_types import AddressId, CustomerId
from customer_api.core.errors import ErrorContext, ResourceNotFoundError
from customer_api.core.repository_protocols import AddressRepository
from customer_api.core.validate_address import validate_address
from customer_api.schemas.address import AddressCreated, AddressOut

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/addresses", tags=["addresses"])


def _not_found(address_id: int) -> ResourceNotFoundError:
    return ResourceNotFoundError("Address", ErrorContext(address_id=address_id))


@router.get("/customer/{customer_id}")
async def list_addresses_for_customer(
    customer_id: int,
    addresses: AddressRepository = Depends(get_address_store),
):
    rows = await addresses.list_for_customer(
        CustomerId(customer_id), primary_first=True,
    )
    return {
        "success": True,
        "data": [AddressOut.model_validate(row) for row in rows],
        "total": len(rows),
        "customer_id": customer_id,
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_address(
    body: dict[str, Any] = Body(...),
    addresses: AddressRepository = Depends(get_address_store),
):
    command = validate_address(body)
    address_id = await addresses.create(command)
    logger.info(
        "Address created",
        extra={"address_id": address_id, "customer_id": command.customer_id},
    )
    return {
        "success": True,
        "message": "Address added successfully",
        "data": AddressCreated(id=address_id),
    }


@router.put("/{address_id}")
async def update_address(
    address_id: int,
    body: dict[str, Any] = Body(...),
    addresses: AddressRepository = Depends(get_address_store),
):
    """Replace the address fields; the owning customer never changes."""
    command = validate_address(body)
    affected = await addresses.update(AddressId(address_id), command)
    if affected == 0:
        raise _not_found(address_id)
    return {"success": True, "message": "Address updated successfully"}


@router.delete("/{address_id}")
async def delete_address(
    address_id: int,
    addresses: AddressRepository = Depends(get_address_store),
):
    affected = await addresses.delete(AddressId(address_id))
    if affected == 0:
        raise _not_found(address_id)
    return {"success": True, "message": "Address deleted successfully"}
