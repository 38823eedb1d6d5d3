"""
app/schemas/reporting.py

Response schemas for summary endpoints.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.sales_import import SalesRecordResponse


class SummaryNodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    period: str
    year: str | None = None
    month: str | None = None
    day: str | None = None
    items_sold: int = Field(..., ge=0)
    total_sales: Decimal
    total_commission: Decimal
    total_remaining: Decimal
    unique_stores: int = Field(..., ge=0)
    unique_vendors: int = Field(..., ge=0)


class PivotTableResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    yearly: list[SummaryNodeResponse] = Field(default_factory=list)
    monthly: list[SummaryNodeResponse] = Field(default_factory=list)
    daily: list[SummaryNodeResponse] = Field(default_factory=list)


class EntityPerformanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    total_items: int = Field(..., ge=0)
    total_sales: Decimal
    total_commission: Decimal
    total_remaining: Decimal
    avg_sale_price: Decimal
    first_sale_date: str
    last_sale_date: str
    unique_counterparts: int = Field(..., ge=0)


class DrillDownResponse(BaseModel):
    """
    Member records of one period, most recent first.
    """

    model_config = ConfigDict(from_attributes=True)

    year: str
    month: str | None = None
    day: str | None = None
    records: list[SalesRecordResponse] = Field(default_factory=list)
