"""
db/base.py

Declarative base and shared mixins for the sales ledger models.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import DateTime, Numeric, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

MONEY = Numeric(12, 2, asdecimal=True)


class Base(DeclarativeBase):
    """
    Shared declarative base; ``Decimal`` columns default to two-place money.
    """

    type_annotation_map: dict[type, Any] = {Decimal: MONEY}


class TimestampMixin:
    """
    Adds created_at / updated_at. updated_at is refreshed on every UPDATE.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        default=lambda: datetime.now(timezone.utc),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
