"""
app/schemas package marker.
"""

from app.schemas.health import DatabaseHealthResponse, HealthResponse
from app.schemas.reporting import (
    DrillDownResponse,
    EntityPerformanceResponse,
    PivotTableResponse,
    SummaryNodeResponse,
)
from app.schemas.sales_import import (
    HTMLImportRequest,
    ImportOptionsRequest,
    ImportResultResponse,
    ImportStatisticsResponse,
    ParseIssueResponse,
    SalesRecordListResponse,
    SalesRecordResponse,
    SalesRecordUpdateRequest,
    ValidationResultResponse,
)

__all__ = [
    "DatabaseHealthResponse",
    "DrillDownResponse",
    "EntityPerformanceResponse",
    "HTMLImportRequest",
    "HealthResponse",
    "ImportOptionsRequest",
    "ImportResultResponse",
    "ImportStatisticsResponse",
    "ParseIssueResponse",
    "PivotTableResponse",
    "SalesRecordListResponse",
    "SalesRecordResponse",
    "SalesRecordUpdateRequest",
    "SummaryNodeResponse",
    "ValidationResultResponse",
]
