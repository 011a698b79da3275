"""Customer ORM — one row per customer.

Invariants:
    - id is an integer primary key assigned by the store
    - phone_number is unique; email is unique but nullable
    - updated_at is refreshed by every update statement (see services/customer_store.py)

Design Decisions:
    - Timestamps use server defaults: rows inserted by the single init script and
      by the API get the same clock
    - passive_deletes on addresses: the ON DELETE CASCADE foreign key does the work
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from customer_api.db.base import Base


class Customer(Base):
    """Customer entity."""
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    phone_number: Mapped[str] = mapped_column(
        String(10), nullable=False, unique=True,
    )
    email: Mapped[str | None] = mapped_column(
        String(255), nullable=True, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )

    addresses: Mapped[list["Address"]] = relationship(
        "Address", back_populates="customer",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, phone_number='{self.phone_number}')>"
