"""
app/api/dependencies.py

Shared FastAPI dependencies wiring request sessions to services.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from app.repositories.sales_record_repository import SalesRecordRepository, SalesRecordStore
from app.services.reporting_service import SalesReportingService
from app.services.sales_import_service import SalesImportService
from db.session import get_db


def get_sales_record_store(db: Session = Depends(get_db)) -> SalesRecordStore:
    return SalesRecordRepository(db)


def get_sales_import_service(
    store: SalesRecordStore = Depends(get_sales_record_store),
) -> SalesImportService:
    return SalesImportService(store)


def get_sales_reporting_service(
    store: SalesRecordStore = Depends(get_sales_record_store),
) -> SalesReportingService:
    return SalesReportingService(store)
