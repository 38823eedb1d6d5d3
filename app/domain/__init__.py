"""
app/domain package marker.
"""

from app.domain.sales_import import (
    ImportOptions,
    ImportResult,
    ImportStatistics,
    RecordImportFailure,
    ValidationResult,
)
from app.domain.sales_record import (
    CONSIGNABLE_COLUMNS,
    REQUIRED_SALES_FIELDS,
    SALES_FIELDS,
    EntityPerformance,
    ParseIssue,
    ParseResult,
    ParseStatistics,
    PivotTable,
    SalesRecordInput,
    SalesRecordUpdate,
    SummaryNode,
    ValueRange,
)

__all__ = [
    "CONSIGNABLE_COLUMNS",
    "EntityPerformance",
    "ImportOptions",
    "ImportResult",
    "ImportStatistics",
    "ParseIssue",
    "ParseResult",
    "ParseStatistics",
    "PivotTable",
    "RecordImportFailure",
    "REQUIRED_SALES_FIELDS",
    "SALES_FIELDS",
    "SalesRecordInput",
    "SalesRecordUpdate",
    "SummaryNode",
    "ValidationResult",
    "ValueRange",
]
