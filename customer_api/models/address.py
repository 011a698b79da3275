"""Address ORM — postal addresses belonging to a customer.

Invariants:
    - Always belongs to a Customer (customer_id FK, ON DELETE CASCADE)
    - country defaults to 'India', is_primary to 0
    - is_primary is a 0/1 integer; several primaries per customer are allowed
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from customer_api.core.domain_types import DEFAULT_COUNTRY
from customer_api.db.base import Base


class Address(Base):
    """Address entity."""
    __tablename__ = "addresses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    address_details: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    pin_code: Mapped[str] = mapped_column(String(6), nullable=False)
    country: Mapped[str] = mapped_column(
        String(100), nullable=False, default=DEFAULT_COUNTRY,
        server_default=DEFAULT_COUNTRY,
    )
    is_primary: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0"),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )

    customer: Mapped["Customer"] = relationship(
        "Customer", back_populates="addresses",
    )
