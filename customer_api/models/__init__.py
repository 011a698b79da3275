"""ORM Models — SQLAlchemy declarative models for customers and their addresses.

Invariants:
    - All models inherit from Base (db/base.py)
    - Customer owns its addresses; the FK cascades deletes at the store level

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from customer_api.models.customer import Customer  # noqa: F401
from customer_api.models.address import Address  # noqa: F401
