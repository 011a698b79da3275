"""Store Dependencies — inject store capabilities into route handlers.

Invariants:
    - Stores built per request from the request's AsyncSession (get_db)
    - Both stores of one request share that session (FastAPI caches get_db per request)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from customer_api.core.repository_protocols import AddressRepository, CustomerRepository
from customer_api.infrastructure.database import get_db
from customer_api.services.address_store import AddressStore
from customer_api.services.customer_store import CustomerStore


def get_customer_store(db: AsyncSession = Depends(get_db)) -> CustomerRepository:
    return CustomerStore(db)


def get_address_store(db: AsyncSession = Depends(get_db)) -> AddressRepository:
    return AddressStore(db)
