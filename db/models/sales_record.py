"""
db/models/sales_record.py

Persisted sales line items.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from sqlalchemy import Date, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class SalesRecord(Base, TimestampMixin):
    __tablename__ = "sales_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    store: Mapped[str] = mapped_column(String(255), nullable=False)
    vendor: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    sale_price: Mapped[Decimal] = mapped_column(nullable=False)
    commission: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0.00"))
    remaining: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0.00"))

    __table_args__ = (
        Index("ix_sales_records_date", "date"),
        Index("ix_sales_records_store", "store"),
        Index("ix_sales_records_vendor", "vendor"),
        Index("ix_sales_records_store_date", "store", "date"),
    )

    def __repr__(self) -> str:
        return f"SalesRecord(id={self.id!r}, store={self.store!r}, date={self.date!r}, sale_price={self.sale_price!r})"
