"""
app/services package marker.
"""

from app.services.html_table_parser import SalesTableParser
from app.services.reporting_service import SalesReportingService
from app.services.sales_import_service import SalesImportService, build_parser, default_import_options
from app.services.summary_service import InvalidPeriodError, SalesSummarizer

__all__ = [
    "InvalidPeriodError",
    "SalesImportService",
    "SalesReportingService",
    "SalesSummarizer",
    "SalesTableParser",
    "build_parser",
    "default_import_options",
]
