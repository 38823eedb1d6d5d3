"""
app/api/routers/reporting.py

Year / month / day summary and drill-down endpoints.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_sales_reporting_service
from app.repositories.sales_record_repository import RecordStoreError
from app.schemas.reporting import (
    DrillDownResponse,
    EntityPerformanceResponse,
    PivotTableResponse,
    SummaryNodeResponse,
)
from app.schemas.sales_import import SalesRecordResponse
from app.services.reporting_service import SalesReportingService
from app.services.summary_service import InvalidPeriodError, normalize_day, normalize_month, normalize_year

router = APIRouter(prefix="/reports", tags=["reports"])

T = TypeVar("T")


def _run_report(build: Callable[[], T]) -> T:
    try:
        return build()
    except InvalidPeriodError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": str(exc), "parameter": exc.parameter, "value": str(exc.value)},
        ) from exc
    except RecordStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to read sales records.",
        ) from exc


@router.get("/yearly", response_model=list[SummaryNodeResponse])
def yearly_summary(
    service: SalesReportingService = Depends(get_sales_reporting_service),
) -> list[SummaryNodeResponse]:
    nodes = _run_report(service.get_yearly_summary)
    return [SummaryNodeResponse.model_validate(node) for node in nodes]


@router.get("/monthly", response_model=list[SummaryNodeResponse])
def monthly_summary(
    year: str | None = Query(default=None),
    service: SalesReportingService = Depends(get_sales_reporting_service),
) -> list[SummaryNodeResponse]:
    nodes = _run_report(lambda: service.get_monthly_summary(year))
    return [SummaryNodeResponse.model_validate(node) for node in nodes]


@router.get("/daily", response_model=list[SummaryNodeResponse])
def daily_summary(
    year: str | None = Query(default=None),
    month: str | None = Query(default=None),
    service: SalesReportingService = Depends(get_sales_reporting_service),
) -> list[SummaryNodeResponse]:
    nodes = _run_report(lambda: service.get_daily_summary(year, month))
    return [SummaryNodeResponse.model_validate(node) for node in nodes]


@router.get("/drill-down", response_model=DrillDownResponse)
def drill_down(
    year: str = Query(...),
    month: str | None = Query(default=None),
    day: str | None = Query(default=None),
    service: SalesReportingService = Depends(get_sales_reporting_service),
) -> DrillDownResponse:
    """
    Records for one year, month or day, most recent first.
    """

    records = _run_report(lambda: service.get_drill_down(year, month, day))
    return DrillDownResponse(
        year=normalize_year(year),
        month=normalize_month(month) if month is not None else None,
        day=normalize_day(day) if day is not None else None,
        records=[SalesRecordResponse.model_validate(record) for record in records],
    )


@router.get("/pivot", response_model=PivotTableResponse)
def pivot_table(
    year: str | None = Query(default=None),
    service: SalesReportingService = Depends(get_sales_reporting_service),
) -> PivotTableResponse:
    pivot = _run_report(lambda: service.get_pivot_table(year))
    return PivotTableResponse.model_validate(pivot)


@router.get("/stores", response_model=list[EntityPerformanceResponse])
def store_performance(
    service: SalesReportingService = Depends(get_sales_reporting_service),
) -> list[EntityPerformanceResponse]:
    rows = _run_report(service.get_store_performance)
    return [EntityPerformanceResponse.model_validate(row) for row in rows]


@router.get("/vendors", response_model=list[EntityPerformanceResponse])
def vendor_performance(
    service: SalesReportingService = Depends(get_sales_reporting_service),
) -> list[EntityPerformanceResponse]:
    rows = _run_report(service.get_vendor_performance)
    return [EntityPerformanceResponse.model_validate(row) for row in rows]


@router.get("/custom", response_model=list[SummaryNodeResponse])
def custom_summary(
    group_by: str = Query(...),
    year: str | None = Query(default=None),
    store: str | None = Query(default=None),
    vendor: str | None = Query(default=None),
    service: SalesReportingService = Depends(get_sales_reporting_service),
) -> list[SummaryNodeResponse]:
    nodes = _run_report(
        lambda: service.get_custom_summary(group_by, year=year, store=store, vendor=vendor)
    )
    return [SummaryNodeResponse.model_validate(node) for node in nodes]
