"""Address Store — SQLAlchemy implementation of AddressRepository.

Invariants:
    - Store failures (e.g. a customer_id with no customer) propagate unchanged
    - update/delete return the affected-row count
    - primary_first ordering: is_primary DESC, created_at ASC, id ASC
"""

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from customer_api.core.commands import AddressCommand
from customer_api.core.domain_types import AddressId, CustomerId
from customer_api.models.address import Address

addresses = Address.__table__


class AddressStore:
    """Address persistence bound to one request's AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_customer(
        self, customer_id: CustomerId, primary_first: bool = False,
    ) -> list[dict]:
        query = select(addresses).where(addresses.c.customer_id == customer_id)
        if primary_first:
            query = query.order_by(
                addresses.c.is_primary.desc(),
                addresses.c.created_at.asc(),
                addresses.c.id.asc(),
            )
        else:
            query = query.order_by(addresses.c.id.asc())
        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]

    async def create(self, command: AddressCommand) -> AddressId:
        address = Address(**command.as_row())
        self.db.add(address)
        await self.db.commit()
        return AddressId(address.id)

    async def update(self, address_id: AddressId, command: AddressCommand) -> int:
        result = await self.db.execute(
            update(addresses)
            .where(addresses.c.id == address_id)
            .values(**command.as_update_row()),
        )
        await self.db.commit()
        return result.rowcount

    async def delete(self, address_id: AddressId) -> int:
        result = await self.db.execute(
            delete(addresses).where(addresses.c.id == address_id),
        )
        await self.db.commit()
        return result.rowcount
