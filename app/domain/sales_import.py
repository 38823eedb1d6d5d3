"""
app/domain/sales_import.py

Domain models for the import orchestration layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from app.domain.sales_record import ParseIssue, SalesRecordInput


@dataclass(frozen=True)
class ImportOptions:
    """
    Per-call parser configuration.

    ``use_consignable_format`` wins over ``custom_column_mapping``.
    """

    use_consignable_format: bool = False
    custom_column_mapping: tuple[str, ...] = ()
    strict_mode: bool = False
    use_batch_import: bool = False


@dataclass(frozen=True)
class RecordImportFailure:
    record: SalesRecordInput
    error: str


@dataclass
class ImportResult:
    """
    End-of-run import summary.
    """

    success: bool
    total_rows: int = 0
    parsed_rows: int = 0
    imported_rows: int = 0
    error_message: str | None = None
    error_details: dict[str, Any] | None = None
    parse_errors: list[ParseIssue] = field(default_factory=list)
    parse_warnings: list[ParseIssue] = field(default_factory=list)
    parse_errors_truncated: int = 0
    parse_warnings_truncated: int = 0
    import_errors: list[RecordImportFailure] = field(default_factory=list)
    imported_records: list[Any] = field(default_factory=list)
    column_mapping: dict[str, int] = field(default_factory=dict)
    data_types_detected: dict[str, str] = field(default_factory=dict)
    processing_time: float = 0.0


@dataclass
class ValidationResult:
    valid: bool
    total_rows: int = 0
    valid_rows: int = 0
    invalid_rows: int = 0
    error_message: str | None = None
    error_details: dict[str, Any] | None = None
    errors: list[ParseIssue] = field(default_factory=list)
    warnings: list[ParseIssue] = field(default_factory=list)
    errors_truncated: int = 0
    warnings_truncated: int = 0
    column_mapping: dict[str, int] = field(default_factory=dict)
    data_types_detected: dict[str, str] = field(default_factory=dict)
    processing_time: float = 0.0


@dataclass(frozen=True)
class ImportStatistics:
    total_records: int
    recent_records: int
    total_sales: Decimal
    average_price: Decimal
