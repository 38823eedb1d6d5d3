"""
app/domain/sales_record.py

Domain models used by the sales table import and reporting flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

SALES_FIELDS: tuple[str, ...] = (
    "store",
    "vendor",
    "date",
    "description",
    "sale_price",
    "commission",
    "remaining",
)

REQUIRED_SALES_FIELDS: tuple[str, ...] = (
    "store",
    "vendor",
    "date",
    "description",
    "sale_price",
)

CONSIGNABLE_COLUMNS: tuple[str, ...] = SALES_FIELDS


@dataclass(frozen=True)
class SalesRecordInput:
    """
    One decoded sales row, ready to hand to the record store.
    """

    store: str
    vendor: str
    date: str
    description: str
    sale_price: Decimal
    commission: Decimal = Decimal("0.00")
    remaining: Decimal = Decimal("0.00")


@dataclass(frozen=True)
class SalesRecordUpdate:
    """
    Partial edit of a stored record; ``None`` leaves a field unchanged.
    """

    store: str | None = None
    vendor: str | None = None
    date: str | None = None
    description: str | None = None
    sale_price: Decimal | None = None
    commission: Decimal | None = None
    remaining: Decimal | None = None

    def changes(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in SALES_FIELDS if getattr(self, name) is not None}


@dataclass(frozen=True)
class ParseIssue:
    """
    One row-level error or warning detail.
    """

    row: int
    message: str
    column: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class ValueRange:
    min: Decimal | None
    max: Decimal | None
    count: int


@dataclass
class ParseStatistics:
    """
    Advisory metadata computed after decoding.
    """

    tables_found: int = 0
    headers_detected: list[str] = field(default_factory=list)
    data_types_detected: dict[str, str] = field(default_factory=dict)
    value_ranges: dict[str, ValueRange] = field(default_factory=dict)
    processing_time: float = 0.0


@dataclass
class ParseResult:
    """
    Outcome of one table parse.

    ``success_count + error_count == total_rows`` and
    ``len(records) == success_count`` always hold. The truncation counts are
    non-zero only when an issue cap is configured.
    """

    total_rows: int = 0
    records: list[SalesRecordInput] = field(default_factory=list)
    success_count: int = 0
    error_count: int = 0
    errors: list[ParseIssue] = field(default_factory=list)
    warnings: list[ParseIssue] = field(default_factory=list)
    errors_truncated: int = 0
    warnings_truncated: int = 0
    column_mapping: dict[str, int] = field(default_factory=dict)
    statistics: ParseStatistics = field(default_factory=ParseStatistics)


@dataclass(frozen=True)
class SummaryNode:
    """
    Roll-up of records for one year, month, or day.
    """

    period: str
    year: str | None
    items_sold: int
    total_sales: Decimal
    total_commission: Decimal
    total_remaining: Decimal
    unique_stores: int
    unique_vendors: int
    month: str | None = None
    day: str | None = None


@dataclass(frozen=True)
class EntityPerformance:
    """
    Totals for one store or vendor across all of its records.
    """

    name: str
    total_items: int
    total_sales: Decimal
    total_commission: Decimal
    total_remaining: Decimal
    avg_sale_price: Decimal
    first_sale_date: str
    last_sale_date: str
    unique_counterparts: int


@dataclass(frozen=True)
class PivotTable:
    yearly: list[SummaryNode]
    monthly: list[SummaryNode]
    daily: list[SummaryNode]
