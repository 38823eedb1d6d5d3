"""
app/schemas/sales_import.py

Request and response schemas for sales import endpoints.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.sales_import import ImportOptions
from app.domain.sales_record import SalesRecordUpdate


class ImportOptionsRequest(BaseModel):
    """
    Optional per-request parser configuration.
    """

    use_consignable_format: bool = False
    custom_column_mapping: list[str] = Field(default_factory=list)
    strict_mode: bool = False
    use_batch_import: bool = False

    def to_domain(self) -> ImportOptions:
        return ImportOptions(
            use_consignable_format=self.use_consignable_format,
            custom_column_mapping=tuple(self.custom_column_mapping),
            strict_mode=self.strict_mode,
            use_batch_import=self.use_batch_import,
        )


class HTMLImportRequest(BaseModel):
    html_data: str
    options: ImportOptionsRequest | None = None


class ParseIssueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    row: int = Field(..., ge=1)
    message: str
    column: str | None = None
    value: str | None = None


class SalesRecordResponse(BaseModel):
    """
    API response model for one stored (or decoded) sales record.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    store: str
    vendor: str
    date: dt.date
    description: str
    sale_price: Decimal
    commission: Decimal
    remaining: Decimal
    created_at: dt.datetime | None = None


class SalesRecordUpdateRequest(BaseModel):
    """
    Partial record edit; omitted fields keep their stored values.
    """

    store: str | None = Field(default=None, min_length=1)
    vendor: str | None = Field(default=None, min_length=1)
    date: dt.date | None = None
    description: str | None = Field(default=None, min_length=1)
    sale_price: Decimal | None = Field(default=None, ge=0)
    commission: Decimal | None = Field(default=None, ge=0)
    remaining: Decimal | None = Field(default=None, ge=0)

    def to_domain(self) -> SalesRecordUpdate:
        return SalesRecordUpdate(
            store=self.store,
            vendor=self.vendor,
            date=self.date.isoformat() if self.date is not None else None,
            description=self.description,
            sale_price=self.sale_price,
            commission=self.commission,
            remaining=self.remaining,
        )


class RecordImportFailureResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    record: SalesRecordResponse
    error: str


class ImportResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    total_rows: int = Field(..., ge=0)
    parsed_rows: int = Field(..., ge=0)
    imported_rows: int = Field(..., ge=0)
    error_message: str | None = None
    error_details: dict[str, Any] | None = None
    parse_errors: list[ParseIssueResponse] = Field(default_factory=list)
    parse_warnings: list[ParseIssueResponse] = Field(default_factory=list)
    parse_errors_truncated: int = Field(default=0, ge=0)
    parse_warnings_truncated: int = Field(default=0, ge=0)
    import_errors: list[RecordImportFailureResponse] = Field(default_factory=list)
    imported_records: list[SalesRecordResponse] = Field(default_factory=list)
    column_mapping: dict[str, int] = Field(default_factory=dict)
    data_types_detected: dict[str, str] = Field(default_factory=dict)
    processing_time: float = 0.0


class ValidationResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    valid: bool
    total_rows: int = Field(..., ge=0)
    valid_rows: int = Field(..., ge=0)
    invalid_rows: int = Field(..., ge=0)
    error_message: str | None = None
    error_details: dict[str, Any] | None = None
    errors: list[ParseIssueResponse] = Field(default_factory=list)
    warnings: list[ParseIssueResponse] = Field(default_factory=list)
    errors_truncated: int = Field(default=0, ge=0)
    warnings_truncated: int = Field(default=0, ge=0)
    column_mapping: dict[str, int] = Field(default_factory=dict)
    data_types_detected: dict[str, str] = Field(default_factory=dict)
    processing_time: float = 0.0


class ImportStatisticsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_records: int = Field(..., ge=0)
    recent_records: int = Field(..., ge=0)
    total_sales: Decimal
    average_price: Decimal


class SalesRecordListResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    records: list[SalesRecordResponse] = Field(default_factory=list)
    total: int = Field(..., ge=0)
    limit: int | None = None
    offset: int = 0
