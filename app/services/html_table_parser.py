"""
app/services/html_table_parser.py

Parses pasted sales tables into typed records.

Pipeline:

    1. normalize_input   - wrap bare rows / convert delimited text into a table
    2. locate_table      - pick the table with the most rows
    3. extract_grid      - trimmed cell strings, row 0 is the header
    4. ColumnMapper      - header row (or positional fields) -> field indices
    5. SalesRowDecoder   - per data row, record or field-level issues
    6. statistics        - advisory column types and amount ranges

Steps 1-4 raise ``TableStructureError`` subclasses and abort the parse.
Row issues never abort; they are collected on the ``ParseResult``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from app.domain.sales_record import CONSIGNABLE_COLUMNS, ParseIssue, ParseResult
from app.logging_utils import log_event
from app.mappers.column_mapper import ColumnMapper, HeaderMatchingStrategy, PositionalStrategy
from app.parsing.normalizer import normalize_input
from app.parsing.table_locator import MarkupTree, SoupMarkupTree, extract_grid, locate_table
from app.services.parse_statistics import compute_value_ranges, detect_column_types
from app.validators.row_decoder import SalesRowDecoder

logger = logging.getLogger(__name__)


class SalesTableParser:
    """
    Converts one text payload into a ``ParseResult``.

    Instances hold only immutable configuration and can be shared between
    threads.
    """

    def __init__(
        self,
        *,
        mapper: ColumnMapper | None = None,
        decoder: SalesRowDecoder | None = None,
        tree_factory: Callable[[str], MarkupTree] = SoupMarkupTree,
        max_issues: int | None = None,
        log_issues: bool = False,
    ) -> None:
        self._mapper = mapper or ColumnMapper(HeaderMatchingStrategy())
        self._decoder = decoder or SalesRowDecoder()
        self._tree_factory = tree_factory
        self._max_issues = max_issues
        self._log_issues = log_issues

    @classmethod
    def with_header_matching(
        cls,
        *,
        strict: bool = False,
        max_issues: int | None = None,
        log_issues: bool = False,
    ) -> "SalesTableParser":
        return cls(
            mapper=ColumnMapper(HeaderMatchingStrategy(strict=strict)),
            max_issues=max_issues,
            log_issues=log_issues,
        )

    @classmethod
    def with_positional_mapping(
        cls,
        columns: Sequence[str],
        *,
        max_issues: int | None = None,
        log_issues: bool = False,
    ) -> "SalesTableParser":
        return cls(
            mapper=ColumnMapper(PositionalStrategy(columns)),
            max_issues=max_issues,
            log_issues=log_issues,
        )

    @classmethod
    def with_consignable_mapping(
        cls,
        *,
        max_issues: int | None = None,
        log_issues: bool = False,
    ) -> "SalesTableParser":
        """
        Store, Vendor, Date, Description, Sale Price, Commission, Remaining.
        """

        return cls.with_positional_mapping(
            CONSIGNABLE_COLUMNS,
            max_issues=max_issues,
            log_issues=log_issues,
        )

    @property
    def mapper(self) -> ColumnMapper:
        return self._mapper

    def parse_html(self, html_data: str) -> ParseResult:
        """
        Run the full pipeline over ``html_data``.

        Raises ``TableStructureError`` when no table can be found or the
        required columns cannot be mapped.
        """

        started = time.perf_counter()
        result = ParseResult()

        markup = normalize_input(html_data, self._mapper.positional_fields)
        tree = self._tree_factory(markup)
        table, tables_found = locate_table(tree)
        result.statistics.tables_found = tables_found

        grid = extract_grid(tree, table)
        headers = grid[0]
        data_rows = grid[1:]
        result.total_rows = len(data_rows)
        result.statistics.headers_detected = list(headers)
        result.column_mapping = self._mapper.resolve_mapping(headers)

        for offset, row in enumerate(data_rows):
            row_number = offset + 1
            mapped_row = self._mapper.map_row(row, result.column_mapping)
            outcome = self._decoder.decode_row(mapped_row=mapped_row, row_number=row_number)

            record = outcome.record
            if outcome.failed or record is None:
                result.error_count += 1
                for issue in outcome.errors:
                    if not self._record_issue(result.errors, issue, severity="error"):
                        result.errors_truncated += 1
            else:
                result.records.append(record)
                result.success_count += 1

            for issue in outcome.warnings:
                if not self._record_issue(result.warnings, issue, severity="warning"):
                    result.warnings_truncated += 1

        result.statistics.data_types_detected = detect_column_types(grid)
        result.statistics.value_ranges = compute_value_ranges(result.records)
        result.statistics.processing_time = time.perf_counter() - started

        log_event(
            logger,
            logging.INFO,
            "sales_table_parsed",
            tables_found=tables_found,
            total_rows=result.total_rows,
            success_count=result.success_count,
            error_count=result.error_count,
            warning_count=len(result.warnings) + result.warnings_truncated,
            issues_truncated=result.errors_truncated + result.warnings_truncated,
            mapping_mode=self._mapper.strategy.context,
            processing_time=round(result.statistics.processing_time, 6),
        )
        return result

    def _record_issue(self, issues: list[ParseIssue], issue: ParseIssue, *, severity: str) -> bool:
        """
        Append ``issue`` unless the cap is reached; False means it was dropped.
        """

        if self._log_issues:
            logger.warning(
                "Sales parse %s row=%s column=%s message=%s value=%r",
                severity,
                issue.row,
                issue.column,
                issue.message,
                issue.value,
            )

        if self._max_issues is not None and len(issues) >= self._max_issues:
            return False
        issues.append(issue)
        return True
