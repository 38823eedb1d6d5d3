"""
app/api/routers/sales_import.py

Sales table import HTTP endpoints.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_sales_import_service, get_sales_record_store
from app.repositories.sales_record_repository import (
    RecordNotFoundError,
    RecordStoreError,
    SalesRecordFilter,
    SalesRecordStore,
)
from app.schemas.sales_import import (
    HTMLImportRequest,
    ImportResultResponse,
    ImportStatisticsResponse,
    SalesRecordListResponse,
    SalesRecordResponse,
    SalesRecordUpdateRequest,
    ValidationResultResponse,
)
from app.services.sales_import_service import SalesImportService

router = APIRouter(tags=["imports"])


@router.post("/imports/html", response_model=ImportResultResponse)
def import_html(
    payload: HTMLImportRequest,
    import_service: SalesImportService = Depends(get_sales_import_service),
) -> ImportResultResponse:
    """
    Parse a pasted table and store every valid row.

    Structural failures return 400 with the structured error body; a failed
    batch write returns 500. Per-record store rejections are listed in the
    200 body.
    """

    options = payload.options.to_domain() if payload.options is not None else None
    try:
        result = import_service.import_html(payload.html_data, options)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if result.error_details is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error_details)
    if not result.success and result.error_message and not result.import_errors:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=result.error_message,
        )
    return ImportResultResponse.model_validate(result, from_attributes=True)


@router.post("/imports/html/validate", response_model=ValidationResultResponse)
def validate_html(
    payload: HTMLImportRequest,
    import_service: SalesImportService = Depends(get_sales_import_service),
) -> ValidationResultResponse:
    options = payload.options.to_domain() if payload.options is not None else None
    try:
        result = import_service.validate_html(payload.html_data, options)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ValidationResultResponse.model_validate(result, from_attributes=True)


@router.get("/imports/statistics", response_model=ImportStatisticsResponse)
def import_statistics(
    import_service: SalesImportService = Depends(get_sales_import_service),
) -> ImportStatisticsResponse:
    try:
        stats = import_service.get_import_statistics()
    except RecordStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to read import statistics.",
        ) from exc
    return ImportStatisticsResponse.model_validate(stats, from_attributes=True)


@router.get("/records", response_model=SalesRecordListResponse)
def list_records(
    store_name: str | None = Query(default=None, alias="store"),
    vendor: str | None = Query(default=None),
    date_from: dt.date | None = Query(default=None),
    date_to: dt.date | None = Query(default=None),
    min_price: Decimal | None = Query(default=None),
    max_price: Decimal | None = Query(default=None),
    sort_by: str = Query(default="date"),
    sort_order: str = Query(default="desc"),
    limit: int | None = Query(default=100, ge=0, le=1000),
    offset: int = Query(default=0, ge=0),
    record_store: SalesRecordStore = Depends(get_sales_record_store),
) -> SalesRecordListResponse:
    try:
        record_filter = SalesRecordFilter(
            store=store_name,
            vendor=vendor,
            date_from=date_from,
            date_to=date_to,
            min_price=min_price,
            max_price=max_price,
            sort_by=sort_by,
            sort_order=sort_order,
            limit=limit,
            offset=offset,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        records, total = record_store.query(record_filter)
    except RecordStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to query sales records.",
        ) from exc

    return SalesRecordListResponse(
        records=[SalesRecordResponse.model_validate(record, from_attributes=True) for record in records],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/imports/recent", response_model=list[SalesRecordResponse])
def recent_imports(
    limit: int = Query(default=10, ge=1, le=1000),
    import_service: SalesImportService = Depends(get_sales_import_service),
) -> list[SalesRecordResponse]:
    try:
        records = import_service.get_recent_imports(limit)
    except RecordStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to read recent imports.",
        ) from exc
    return [SalesRecordResponse.model_validate(record, from_attributes=True) for record in records]


def _not_found(exc: RecordNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/records/{record_id}", response_model=SalesRecordResponse)
def get_record(
    record_id: int,
    record_store: SalesRecordStore = Depends(get_sales_record_store),
) -> SalesRecordResponse:
    try:
        record = record_store.get_by_id(record_id)
    except RecordNotFoundError as exc:
        raise _not_found(exc) from exc
    except RecordStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to read sales record.",
        ) from exc
    return SalesRecordResponse.model_validate(record, from_attributes=True)


@router.patch("/records/{record_id}", response_model=SalesRecordResponse)
def update_record(
    record_id: int,
    payload: SalesRecordUpdateRequest,
    record_store: SalesRecordStore = Depends(get_sales_record_store),
) -> SalesRecordResponse:
    try:
        record = record_store.update(record_id, payload.to_domain())
    except RecordNotFoundError as exc:
        raise _not_found(exc) from exc
    except RecordStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to update sales record.",
        ) from exc
    return SalesRecordResponse.model_validate(record, from_attributes=True)


@router.delete("/records/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_record(
    record_id: int,
    record_store: SalesRecordStore = Depends(get_sales_record_store),
) -> None:
    try:
        record_store.delete(record_id)
    except RecordNotFoundError as exc:
        raise _not_found(exc) from exc
    except RecordStoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to delete sales record.",
        ) from exc
