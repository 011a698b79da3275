"""Customer Store — SQLAlchemy implementation of CustomerRepository.

Invariants:
    - A CustomerListQuery is rendered once into a listing and a count statement
      that share the same join and the same WHERE conditions
    - The count statement runs after the listing statement completes
    - Duplicate phone/email on insert or update surface as DuplicatePhoneError /
      DuplicateEmailError; any other write failure as CustomerWriteError
    - update/delete return the affected-row count

Design Decisions:
    - Core statements against Customer.__table__ for listing/update/delete:
      plain dict rows and a reliable rowcount
    - Distinct city aggregation compiled per dialect (group_concat / string_agg)
"""

import logging

from sqlalchemy import String, and_, delete, distinct, func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

from customer_api.core.commands import CustomerCreateCommand, CustomerUpdateCommand
from customer_api.core.customer_query import CustomerListQuery, SubstringFilter
from customer_api.core.domain_types import CustomerId, FilterField, SortField, SortOrder
from customer_api.core.errors import (
    CustomerApiError,
    CustomerWriteError,
    DuplicateEmailError,
    DuplicatePhoneError,
    ErrorContext,
)
from customer_api.models.address import Address
from customer_api.models.customer import Customer

logger = logging.getLogger(__name__)

customers = Customer.__table__
addresses = Address.__table__


class DistinctStringAgg(FunctionElement):
    """Comma-joined distinct values of a column within a group."""
    type = String()
    inherit_cache = True


@compiles(DistinctStringAgg)
def _compile_group_concat(element, compiler, **kw):
    return f"group_concat(DISTINCT {compiler.process(element.clauses, **kw)})"


@compiles(DistinctStringAgg, "postgresql")
def _compile_string_agg(element, compiler, **kw):
    return f"string_agg(DISTINCT {compiler.process(element.clauses, **kw)}, ',')"


_SORT_COLUMNS = {
    SortField.ID: customers.c.id,
    SortField.FIRST_NAME: customers.c.first_name,
    SortField.LAST_NAME: customers.c.last_name,
    SortField.PHONE_NUMBER: customers.c.phone_number,
    SortField.CREATED_AT: customers.c.created_at,
}

_ADDRESS_FILTER_COLUMNS = {
    FilterField.CITY: addresses.c.city,
    FilterField.STATE: addresses.c.state,
    FilterField.PIN_CODE: addresses.c.pin_code,
}

_SEARCH_COLUMNS = (
    customers.c.first_name,
    customers.c.last_name,
    customers.c.phone_number,
    customers.c.email,
)


def render_condition(clause: SubstringFilter):
    """SubstringFilter → case-insensitive LIKE condition."""
    if clause.field is FilterField.SEARCH:
        return or_(*(column.ilike(clause.pattern) for column in _SEARCH_COLUMNS))
    return _ADDRESS_FILTER_COLUMNS[clause.field].ilike(clause.pattern)


def render_listing(query: CustomerListQuery):
    """Build (listing, count) statements for a CustomerListQuery."""
    joined = customers.outerjoin(addresses, addresses.c.customer_id == customers.c.id)
    conditions = [render_condition(clause) for clause in query.filters]

    sort_column = _SORT_COLUMNS[query.sort_by]
    ordering = sort_column.desc() if query.sort_order is SortOrder.DESC else sort_column.asc()

    listing = (
        select(
            *customers.c,
            func.count(addresses.c.id).label("address_count"),
            DistinctStringAgg(addresses.c.city).label("cities"),
        )
        .select_from(joined)
    )
    count = select(func.count(distinct(customers.c.id))).select_from(joined)
    if conditions:
        listing = listing.where(and_(*conditions))
        count = count.where(and_(*conditions))

    listing = (
        listing.group_by(customers.c.id)
        .order_by(ordering)
        .limit(query.limit)
        .offset(query.offset)
    )
    return listing, count


def _listing_row(row) -> dict:
    data = dict(row)
    cities = data.get("cities")
    data["cities"] = cities.split(",") if cities else []
    return data


def _write_error(exc: SQLAlchemyError, context: ErrorContext) -> CustomerApiError:
    """Map a failed customer write to a conflict or a generic write error."""
    if isinstance(exc, IntegrityError):
        message = str(exc.orig).lower()
        if "unique" in message or "duplicate" in message:
            if "phone_number" in message:
                return DuplicatePhoneError(context)
            if "email" in message:
                return DuplicateEmailError(context)
    return CustomerWriteError(str(exc), context)


class CustomerStore:
    """Customer persistence bound to one request's AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_page(self, query: CustomerListQuery) -> tuple[list[dict], int]:
        listing, count = render_listing(query)
        result = await self.db.execute(listing)
        rows = [_listing_row(row) for row in result.mappings().all()]
        total = (await self.db.execute(count)).scalar_one()
        return rows, total

    async def get(self, customer_id: CustomerId) -> dict | None:
        result = await self.db.execute(
            select(customers).where(customers.c.id == customer_id),
        )
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def create(self, command: CustomerCreateCommand) -> CustomerId:
        customer = Customer(
            first_name=command.first_name,
            last_name=command.last_name,
            phone_number=command.phone_number,
            email=command.email,
        )
        self.db.add(customer)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"Customer insert failed: {e.__class__.__name__}")
            raise _write_error(e, ErrorContext()) from e
        return CustomerId(customer.id)

    async def update(
        self, customer_id: CustomerId, command: CustomerUpdateCommand,
    ) -> int:
        stmt = (
            update(customers)
            .where(customers.c.id == customer_id)
            .values(**command.fields, updated_at=func.now())
        )
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(
                f"Customer update failed: {e.__class__.__name__}",
                extra={"customer_id": customer_id},
            )
            raise _write_error(e, ErrorContext(customer_id=customer_id)) from e
        return result.rowcount

    async def delete(self, customer_id: CustomerId) -> int:
        result = await self.db.execute(
            delete(customers).where(customers.c.id == customer_id),
        )
        await self.db.commit()
        return result.rowcount
