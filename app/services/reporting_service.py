"""
app/services/reporting_service.py

Summaries over stored sales records.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from app.domain.sales_record import EntityPerformance, PivotTable, SummaryNode
from app.repositories.sales_record_repository import SalesRecordFilter, SalesRecordStore
from app.services.summary_service import SalesSummarizer, normalize_year

logger = logging.getLogger(__name__)


class SalesReportingService:
    """
    Loads records from the store and delegates aggregation to ``SalesSummarizer``.

    Records are loaded oldest first (ties by id) so the summarizer's insertion
    order matches import order.
    """

    def __init__(self, store: SalesRecordStore) -> None:
        self._store = store

    def _summarizer(self, year: str | int | None = None) -> SalesSummarizer:
        record_filter = SalesRecordFilter(sort_by="date", sort_order="asc")
        if year is not None:
            year_number = int(normalize_year(year))
            record_filter = SalesRecordFilter(
                date_from=date(year_number, 1, 1),
                date_to=date(year_number, 12, 31),
                sort_by="date",
                sort_order="asc",
            )
        records, total = self._store.query(record_filter)
        logger.debug("Loaded %d sales records for reporting (year=%s)", total, year)
        return SalesSummarizer(records)

    def get_yearly_summary(self) -> list[SummaryNode]:
        return self._summarizer().get_yearly_summary()

    def get_monthly_summary(self, year: str | int | None = None) -> list[SummaryNode]:
        return self._summarizer(year).get_monthly_summary(year)

    def get_daily_summary(
        self,
        year: str | int | None = None,
        month: str | int | None = None,
    ) -> list[SummaryNode]:
        return self._summarizer(year).get_daily_summary(year, month)

    def get_drill_down(
        self,
        year: str | int,
        month: str | int | None = None,
        day: str | int | None = None,
    ) -> list[Any]:
        return self._summarizer(year).get_drill_down(year, month, day)

    def get_pivot_table(self, year: str | int | None = None) -> PivotTable:
        return self._summarizer(year).get_pivot_table(year)

    def get_store_performance(self) -> list[EntityPerformance]:
        return self._summarizer().get_store_performance()

    def get_vendor_performance(self) -> list[EntityPerformance]:
        return self._summarizer().get_vendor_performance()

    def get_custom_summary(
        self,
        group_by: str,
        *,
        year: str | int | None = None,
        store: str | None = None,
        vendor: str | None = None,
    ) -> list[SummaryNode]:
        return self._summarizer(year).get_custom_summary(group_by, year=year, store=store, vendor=vendor)
