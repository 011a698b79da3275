"""Boundary Protocols — contracts between the route handlers and the store.

Invariants:
    - Handlers depend on these Protocols, never on a concrete session or engine
    - Mutations return the affected-row count; 0 means "not found"
    - Store failures propagate; no implementation retries or swallows them

Design Decisions:
    - Protocol over ABC: structural subtyping, tests may pass any object with
      the same async methods
"""

from typing import Protocol

from customer_api.core.commands import (
    AddressCommand,
    CustomerCreateCommand,
    CustomerUpdateCommand,
)
from customer_api.core.customer_query import CustomerListQuery
from customer_api.core.domain_types import AddressId, CustomerId


class CustomerRepository(Protocol):
    """Contract for customer persistence."""
    async def list_page(self, query: CustomerListQuery) -> tuple[list[dict], int]: ...
    async def get(self, customer_id: CustomerId) -> dict | None: ...
    async def create(self, command: CustomerCreateCommand) -> CustomerId: ...
    async def update(
        self, customer_id: CustomerId, command: CustomerUpdateCommand,
    ) -> int: ...
    async def delete(self, customer_id: CustomerId) -> int: ...


class AddressRepository(Protocol):
    """Contract for address persistence."""
    async def list_for_customer(
        self, customer_id: CustomerId, primary_first: bool = False,
    ) -> list[dict]: ...
    async def create(self, command: AddressCommand) -> AddressId: ...
    async def update(self, address_id: AddressId, command: AddressCommand) -> int: ...
    async def delete(self, address_id: AddressId) -> int: ...
