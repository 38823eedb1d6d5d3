"""
app/repositories/sales_record_repository.py

Persistence layer for sales records.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Protocol

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.sales_record import SalesRecordInput, SalesRecordUpdate
from db.models.sales_record import SalesRecord

logger = logging.getLogger(__name__)

SORTABLE_FIELDS: dict[str, Any] = {
    "date": SalesRecord.date,
    "store": SalesRecord.store,
    "vendor": SalesRecord.vendor,
    "sale_price": SalesRecord.sale_price,
    "created_at": SalesRecord.created_at,
}
SORT_ORDERS = ("asc", "desc")


class RecordStoreError(RuntimeError):
    """
    Raised when the backing store rejects a read or write.
    """


class RecordNotFoundError(RecordStoreError):
    def __init__(self, record_id: int) -> None:
        super().__init__(f"sales record with ID {record_id} not found")
        self.record_id = record_id


@dataclass(frozen=True)
class SalesRecordFilter:
    """
    Query filter; ``None`` means unconstrained. Date bounds are inclusive.
    """

    store: str | None = None
    vendor: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    sort_by: str = "date"
    sort_order: str = "desc"
    limit: int | None = None
    offset: int = 0

    def __post_init__(self) -> None:
        if self.sort_by not in SORTABLE_FIELDS:
            raise ValueError(f"Unsupported sort field {self.sort_by!r}; expected one of {sorted(SORTABLE_FIELDS)}")
        if self.sort_order not in SORT_ORDERS:
            raise ValueError(f"Unsupported sort order {self.sort_order!r}; expected 'asc' or 'desc'")
        if self.limit is not None and self.limit < 0:
            raise ValueError("limit must be non-negative")
        if self.offset < 0:
            raise ValueError("offset must be non-negative")


@dataclass(frozen=True)
class SalesRecordStats:
    total_records: int
    earliest_date: date | None
    latest_date: date | None
    total_sales: Decimal
    average_price: Decimal
    unique_stores: int
    unique_vendors: int


class SalesRecordStore(Protocol):
    """
    Interface consumed by the import and reporting services.
    """

    def create_one(self, record: SalesRecordInput) -> SalesRecord:
        ...

    def create_batch(self, records: Sequence[SalesRecordInput]) -> list[SalesRecord]:
        ...

    def query(self, record_filter: SalesRecordFilter) -> tuple[list[SalesRecord], int]:
        ...

    def get_by_id(self, record_id: int) -> SalesRecord:
        ...

    def update(self, record_id: int, changes: SalesRecordUpdate) -> SalesRecord:
        ...

    def delete(self, record_id: int) -> None:
        ...

    def get_stats(self) -> SalesRecordStats:
        ...


def to_model(record: SalesRecordInput) -> SalesRecord:
    return SalesRecord(
        store=record.store,
        vendor=record.vendor,
        date=date.fromisoformat(record.date),
        description=record.description,
        sale_price=record.sale_price,
        commission=record.commission,
        remaining=record.remaining,
    )


class SalesRecordRepository:
    """
    SQLAlchemy-backed ``SalesRecordStore``.

    Writes commit on success and roll back before raising ``RecordStoreError``.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create_one(self, record: SalesRecordInput) -> SalesRecord:
        model = to_model(record)
        try:
            self._session.add(model)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise RecordStoreError(f"failed to create sales record: {exc}") from exc
        return model

    def create_batch(self, records: Sequence[SalesRecordInput]) -> list[SalesRecord]:
        """
        Insert every record or none of them.
        """

        if not records:
            return []

        models = [to_model(record) for record in records]
        try:
            self._session.add_all(models)
            self._session.flush()
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise RecordStoreError(f"failed to create sales records batch: {exc}") from exc

        logger.info("Inserted %d sales records in one batch", len(models))
        return models

    def query(self, record_filter: SalesRecordFilter | None = None) -> tuple[list[SalesRecord], int]:
        """
        Return one page of matching records and the unpaged match count.
        """

        record_filter = record_filter or SalesRecordFilter()
        stmt = self._apply_filter(select(SalesRecord), record_filter)
        count_stmt = self._apply_filter(select(func.count(SalesRecord.id)), record_filter)

        sort_column = SORTABLE_FIELDS[record_filter.sort_by]
        if record_filter.sort_order == "desc":
            stmt = stmt.order_by(sort_column.desc(), SalesRecord.id.desc())
        else:
            stmt = stmt.order_by(sort_column.asc(), SalesRecord.id.asc())

        if record_filter.offset:
            stmt = stmt.offset(record_filter.offset)
        if record_filter.limit is not None:
            stmt = stmt.limit(record_filter.limit)

        try:
            total = int(self._session.execute(count_stmt).scalar_one())
            records = list(self._session.execute(stmt).scalars().all())
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise RecordStoreError(f"failed to query sales records: {exc}") from exc
        return records, total

    def get_by_id(self, record_id: int) -> SalesRecord:
        try:
            model = self._session.get(SalesRecord, record_id)
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise RecordStoreError(f"failed to get sales record: {exc}") from exc
        if model is None:
            raise RecordNotFoundError(record_id)
        return model

    def update(self, record_id: int, changes: SalesRecordUpdate) -> SalesRecord:
        """
        Apply the non-``None`` fields of ``changes``.

        Raises ``ValueError`` for a date that is not ``YYYY-MM-DD`` and
        ``RecordNotFoundError`` for an unknown id.
        """

        values = changes.changes()
        if "date" in values:
            values["date"] = date.fromisoformat(values["date"])

        model = self.get_by_id(record_id)
        if not values:
            return model

        for name, value in values.items():
            setattr(model, name, value)
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise RecordStoreError(f"failed to update sales record: {exc}") from exc
        logger.info("Updated sales record id=%s fields=%s", record_id, sorted(values))
        return model

    def delete(self, record_id: int) -> None:
        model = self.get_by_id(record_id)
        try:
            self._session.delete(model)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise RecordStoreError(f"failed to delete sales record: {exc}") from exc
        logger.info("Deleted sales record id=%s", record_id)

    def get_stats(self) -> SalesRecordStats:
        stmt = select(
            func.count(SalesRecord.id),
            func.min(SalesRecord.date),
            func.max(SalesRecord.date),
            func.coalesce(func.sum(SalesRecord.sale_price), 0),
            func.count(func.distinct(SalesRecord.store)),
            func.count(func.distinct(SalesRecord.vendor)),
        )
        try:
            row = self._session.execute(stmt).one()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise RecordStoreError(f"failed to compute sales record stats: {exc}") from exc

        total_records, earliest, latest, total_sales, unique_stores, unique_vendors = row
        total = Decimal(str(total_sales)).quantize(Decimal("0.01"))
        average = (total / total_records).quantize(Decimal("0.01")) if total_records else Decimal("0.00")
        return SalesRecordStats(
            total_records=int(total_records),
            earliest_date=earliest,
            latest_date=latest,
            total_sales=total,
            average_price=average,
            unique_stores=int(unique_stores),
            unique_vendors=int(unique_vendors),
        )

    @staticmethod
    def _apply_filter(stmt: Select, record_filter: SalesRecordFilter) -> Select:
        if record_filter.store is not None:
            stmt = stmt.where(SalesRecord.store == record_filter.store)
        if record_filter.vendor is not None:
            stmt = stmt.where(SalesRecord.vendor == record_filter.vendor)
        if record_filter.date_from is not None:
            stmt = stmt.where(SalesRecord.date >= record_filter.date_from)
        if record_filter.date_to is not None:
            stmt = stmt.where(SalesRecord.date <= record_filter.date_to)
        if record_filter.min_price is not None:
            stmt = stmt.where(SalesRecord.sale_price >= record_filter.min_price)
        if record_filter.max_price is not None:
            stmt = stmt.where(SalesRecord.sale_price <= record_filter.max_price)
        return stmt
