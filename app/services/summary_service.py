"""
app/services/summary_service.py

Year -> month -> day roll-ups over decoded or stored sales records.

Records only need ``store``, ``vendor``, ``date``, ``sale_price``,
``commission`` and ``remaining`` attributes; ``date`` may be an ISO string
(``SalesRecordInput``) or a ``datetime.date`` (stored ``SalesRecord`` rows).

Every node is computed from its member records directly, and amounts are
``Decimal``, so a parent's totals always equal the sum of its children's.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from app.domain.sales_record import EntityPerformance, PivotTable, SummaryNode

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_CENT = Decimal("0.01")

CUSTOM_GROUPINGS: tuple[str, ...] = ("year", "month", "day", "store", "vendor")


class InvalidPeriodError(ValueError):
    """
    Raised when a summary or drill-down key is malformed.
    """

    def __init__(self, parameter: str, value: Any, reason: str) -> None:
        super().__init__(f"Invalid {parameter} {value!r}: {reason}")
        self.parameter = parameter
        self.value = value


def record_date(record: Any) -> date:
    """
    Return the calendar date of a decoded or stored record.
    """

    value = record.date
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _as_decimal(value: Any) -> Decimal:
    if value is None:
        return _ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def normalize_year(year: str | int) -> str:
    text = str(year).strip()
    if len(text) != 4 or not text.isdecimal() or int(text) < 1:
        raise InvalidPeriodError("year", year, "expected a four digit year")
    return f"{int(text):04d}"


def normalize_month(month: str | int) -> str:
    text = str(month).strip()
    if not text.isdecimal() or not 1 <= int(text) <= 12:
        raise InvalidPeriodError("month", month, "expected a month between 1 and 12")
    return f"{int(text):02d}"


def normalize_day(day: str | int) -> str:
    text = str(day).strip()
    if not text.isdecimal() or not 1 <= int(text) <= 31:
        raise InvalidPeriodError("day", day, "expected a day between 1 and 31")
    return f"{int(text):02d}"


@dataclass(frozen=True)
class _Member:
    sequence: int
    day: date
    record: Any


class SalesSummarizer:
    """
    In-memory hierarchical summaries with drill-down.

    Insertion order of ``records`` is kept as the tie-break for drill-down
    ordering.
    """

    def __init__(self, records: Iterable[Any]) -> None:
        self._members: list[_Member] = [
            _Member(sequence=index, day=record_date(record), record=record)
            for index, record in enumerate(records)
        ]

    # ------------------------------------------------------------------
    # Period summaries
    # ------------------------------------------------------------------

    def get_yearly_summary(self) -> list[SummaryNode]:
        groups = self._group(self._members, lambda member: f"{member.day.year:04d}")
        return [
            self._build_node(period, members, year=period)
            for period, members in sorted(groups.items(), reverse=True)
        ]

    def get_monthly_summary(self, year: str | int | None = None) -> list[SummaryNode]:
        members = self._filter(year=year)
        groups = self._group(members, lambda member: f"{member.day.year:04d}-{member.day.month:02d}")
        return [
            self._build_node(period, group, year=period[:4], month=period[5:7])
            for period, group in sorted(groups.items(), reverse=True)
        ]

    def get_daily_summary(
        self,
        year: str | int | None = None,
        month: str | int | None = None,
    ) -> list[SummaryNode]:
        members = self._filter(year=year, month=month)
        groups = self._group(members, lambda member: member.day.isoformat())
        return [
            self._build_node(period, group, year=period[:4], month=period[5:7], day=period[8:10])
            for period, group in sorted(groups.items(), reverse=True)
        ]

    def get_pivot_table(self, year: str | int | None = None) -> PivotTable:
        yearly = self.get_yearly_summary()
        if year is not None:
            wanted = normalize_year(year)
            yearly = [node for node in yearly if node.year == wanted]
        return PivotTable(
            yearly=yearly,
            monthly=self.get_monthly_summary(year),
            daily=self.get_daily_summary(year),
        )

    def get_drill_down(
        self,
        year: str | int,
        month: str | int | None = None,
        day: str | int | None = None,
    ) -> list[Any]:
        """
        Return the member records of one period, most recent first.

        Records sharing a date are ordered by insertion, latest first.
        """

        members = self._filter(year=normalize_year(year), month=month, day=day)
        ordered = sorted(members, key=lambda member: (member.day, member.sequence), reverse=True)
        return [member.record for member in ordered]

    # ------------------------------------------------------------------
    # Entity performance
    # ------------------------------------------------------------------

    def get_store_performance(self) -> list[EntityPerformance]:
        return self._entity_performance(
            key=lambda record: record.store,
            counterpart=lambda record: record.vendor,
        )

    def get_vendor_performance(self) -> list[EntityPerformance]:
        return self._entity_performance(
            key=lambda record: record.vendor,
            counterpart=lambda record: record.store,
        )

    def get_custom_summary(
        self,
        group_by: str,
        *,
        year: str | int | None = None,
        store: str | None = None,
        vendor: str | None = None,
    ) -> list[SummaryNode]:
        """
        Group by year, month, day, store or vendor with optional filters.

        Store and vendor nodes leave year, month and day unset.
        """

        if group_by not in CUSTOM_GROUPINGS:
            raise InvalidPeriodError("group_by", group_by, f"expected one of {list(CUSTOM_GROUPINGS)}")

        members = [
            member
            for member in self._filter(year=year)
            if (store is None or member.record.store == store)
            and (vendor is None or member.record.vendor == vendor)
        ]
        key_functions: dict[str, Callable[[_Member], str]] = {
            "year": lambda member: f"{member.day.year:04d}",
            "month": lambda member: f"{member.day.year:04d}-{member.day.month:02d}",
            "day": lambda member: member.day.isoformat(),
            "store": lambda member: member.record.store,
            "vendor": lambda member: member.record.vendor,
        }
        groups = self._group(members, key_functions[group_by])
        nodes: list[SummaryNode] = []
        for period, group in sorted(groups.items(), reverse=True):
            if group_by in ("store", "vendor"):
                nodes.append(self._build_node(period, group, year=None))
                continue
            nodes.append(
                self._build_node(
                    period,
                    group,
                    year=period[:4],
                    month=period[5:7] or None,
                    day=period[8:10] or None,
                )
            )
        return nodes

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _filter(
        self,
        *,
        year: str | int | None = None,
        month: str | int | None = None,
        day: str | int | None = None,
    ) -> list[_Member]:
        wanted_year = normalize_year(year) if year is not None else None
        wanted_month = normalize_month(month) if month is not None else None
        wanted_day = normalize_day(day) if day is not None else None

        selected: list[_Member] = []
        for member in self._members:
            if wanted_year is not None and f"{member.day.year:04d}" != wanted_year:
                continue
            if wanted_month is not None and f"{member.day.month:02d}" != wanted_month:
                continue
            if wanted_day is not None and f"{member.day.day:02d}" != wanted_day:
                continue
            selected.append(member)
        return selected

    @staticmethod
    def _group(
        members: Sequence[_Member],
        key: Callable[[_Member], str],
    ) -> dict[str, list[_Member]]:
        groups: dict[str, list[_Member]] = {}
        for member in members:
            groups.setdefault(key(member), []).append(member)
        return groups

    @staticmethod
    def _build_node(
        period: str,
        members: Sequence[_Member],
        *,
        year: str | None,
        month: str | None = None,
        day: str | None = None,
    ) -> SummaryNode:
        records = [member.record for member in members]
        return SummaryNode(
            period=period,
            year=year,
            month=month,
            day=day,
            items_sold=len(records),
            total_sales=sum((_as_decimal(record.sale_price) for record in records), _ZERO),
            total_commission=sum((_as_decimal(record.commission) for record in records), _ZERO),
            total_remaining=sum((_as_decimal(record.remaining) for record in records), _ZERO),
            unique_stores=len({record.store for record in records}),
            unique_vendors=len({record.vendor for record in records}),
        )

    def _entity_performance(
        self,
        *,
        key: Callable[[Any], str],
        counterpart: Callable[[Any], str],
    ) -> list[EntityPerformance]:
        groups = self._group(self._members, lambda member: key(member.record))
        results: list[EntityPerformance] = []
        for name, members in groups.items():
            records = [member.record for member in members]
            total_sales = sum((_as_decimal(record.sale_price) for record in records), _ZERO)
            days = [member.day for member in members]
            results.append(
                EntityPerformance(
                    name=name,
                    total_items=len(records),
                    total_sales=total_sales,
                    total_commission=sum((_as_decimal(r.commission) for r in records), _ZERO),
                    total_remaining=sum((_as_decimal(r.remaining) for r in records), _ZERO),
                    avg_sale_price=(total_sales / len(records)).quantize(_CENT),
                    first_sale_date=min(days).isoformat(),
                    last_sale_date=max(days).isoformat(),
                    unique_counterparts=len({counterpart(record) for record in records}),
                )
            )
        results.sort(key=lambda performance: performance.total_sales, reverse=True)
        logger.debug("Computed performance for %d entities", len(results))
        return results
