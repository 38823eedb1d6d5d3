"""
app/repositories package marker.
"""

from app.repositories.sales_record_repository import (
    RecordNotFoundError,
    RecordStoreError,
    SalesRecordFilter,
    SalesRecordRepository,
    SalesRecordStats,
    SalesRecordStore,
)

__all__ = [
    "RecordNotFoundError",
    "RecordStoreError",
    "SalesRecordFilter",
    "SalesRecordRepository",
    "SalesRecordStats",
    "SalesRecordStore",
]
