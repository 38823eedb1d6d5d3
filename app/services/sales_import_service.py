"""
app/services/sales_import_service.py

Orchestrates parse -> persist for pasted sales tables.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, timedelta
from typing import Any

from app.config import SalesImportSettings, get_sales_import_settings
from app.domain.sales_import import (
    ImportOptions,
    ImportResult,
    ImportStatistics,
    RecordImportFailure,
    ValidationResult,
)
from app.domain.sales_record import ParseResult
from app.logging_utils import log_event
from app.parsing.errors import TableStructureError
from app.repositories.sales_record_repository import (
    RecordStoreError,
    SalesRecordFilter,
    SalesRecordStore,
)
from app.services.html_table_parser import SalesTableParser

logger = logging.getLogger(__name__)


def default_import_options(settings: SalesImportSettings) -> ImportOptions:
    return ImportOptions(
        use_consignable_format=settings.consignable_format,
        custom_column_mapping=tuple(settings.positional_columns),
        strict_mode=settings.strict_mode,
        use_batch_import=settings.use_batch_import,
    )


def build_parser(options: ImportOptions, settings: SalesImportSettings) -> SalesTableParser:
    """
    Build a parser for one call.

    Consignable format wins over a custom positional mapping, which wins over
    header matching.
    """

    limits = {
        "max_issues": settings.max_parse_issues,
        "log_issues": settings.log_parse_issues,
    }
    if options.use_consignable_format:
        return SalesTableParser.with_consignable_mapping(**limits)
    if options.custom_column_mapping:
        return SalesTableParser.with_positional_mapping(options.custom_column_mapping, **limits)
    return SalesTableParser.with_header_matching(strict=options.strict_mode, **limits)


class SalesImportService:
    """
    Parses pasted tables and writes the decoded records to a record store.

    Structural parse failures are reported on the result, not raised.
    Store failures on statistics reads propagate as ``RecordStoreError``.
    """

    def __init__(
        self,
        store: SalesRecordStore,
        *,
        settings: SalesImportSettings | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._settings = settings or get_sales_import_settings()
        self._today = today

    def _resolve_options(self, options: ImportOptions | None) -> ImportOptions:
        return options if options is not None else default_import_options(self._settings)

    def _parse(self, html_data: str, options: ImportOptions) -> ParseResult:
        return build_parser(options, self._settings).parse_html(html_data)

    def import_html(self, html_data: str, options: ImportOptions | None = None) -> ImportResult:
        """
        Parse and persist records one at a time.

        A record the store rejects is listed in ``import_errors`` and the
        remaining records are still imported.
        """

        resolved = self._resolve_options(options)
        if resolved.use_batch_import:
            return self.import_html_batch(html_data, resolved)

        try:
            parse_result = self._parse(html_data, resolved)
        except TableStructureError as exc:
            logger.warning("Sales import aborted: %s", exc)
            return ImportResult(
                success=False,
                error_message=f"Failed to parse HTML data: {exc}",
                error_details=exc.to_dict(),
            )

        result = ImportResult(
            success=False,
            total_rows=parse_result.total_rows,
            parsed_rows=parse_result.success_count,
            parse_errors=parse_result.errors,
            parse_warnings=parse_result.warnings,
            parse_errors_truncated=parse_result.errors_truncated,
            parse_warnings_truncated=parse_result.warnings_truncated,
            column_mapping=parse_result.column_mapping,
            data_types_detected=parse_result.statistics.data_types_detected,
            processing_time=parse_result.statistics.processing_time,
        )

        for record in parse_result.records:
            try:
                saved = self._store.create_one(record)
            except RecordStoreError as exc:
                result.import_errors.append(RecordImportFailure(record=record, error=str(exc)))
                continue
            result.imported_records.append(saved)

        result.imported_rows = len(result.imported_records)
        result.success = result.imported_rows > 0
        if result.import_errors:
            result.error_message = (
                f"Imported {result.imported_rows} of {result.parsed_rows} records. "
                f"{len(result.import_errors)} records failed to import."
            )

        log_event(
            logger,
            logging.INFO,
            "sales_import_finished",
            mode="per_record",
            total_rows=result.total_rows,
            parsed_rows=result.parsed_rows,
            imported_rows=result.imported_rows,
            import_errors=len(result.import_errors),
        )
        return result

    def import_html_batch(self, html_data: str, options: ImportOptions | None = None) -> ImportResult:
        """
        Parse and persist every decoded record in a single all-or-nothing batch.
        """

        resolved = self._resolve_options(options)
        try:
            parse_result = self._parse(html_data, resolved)
        except TableStructureError as exc:
            logger.warning("Sales batch import aborted: %s", exc)
            return ImportResult(
                success=False,
                error_message=f"Failed to parse HTML data: {exc}",
                error_details=exc.to_dict(),
            )

        try:
            saved = self._store.create_batch(parse_result.records)
        except RecordStoreError as exc:
            logger.error("Sales batch import failed to persist %d records: %s", len(parse_result.records), exc)
            return ImportResult(
                success=False,
                error_message=f"Failed to import records: {exc}",
                total_rows=parse_result.total_rows,
                parsed_rows=parse_result.success_count,
                parse_errors=parse_result.errors,
                parse_warnings=parse_result.warnings,
                parse_errors_truncated=parse_result.errors_truncated,
                parse_warnings_truncated=parse_result.warnings_truncated,
            )

        result = ImportResult(
            success=True,
            total_rows=parse_result.total_rows,
            parsed_rows=parse_result.success_count,
            imported_rows=len(saved),
            parse_errors=parse_result.errors,
            parse_warnings=parse_result.warnings,
            parse_errors_truncated=parse_result.errors_truncated,
            parse_warnings_truncated=parse_result.warnings_truncated,
            imported_records=list(saved),
            column_mapping=parse_result.column_mapping,
            data_types_detected=parse_result.statistics.data_types_detected,
            processing_time=parse_result.statistics.processing_time,
        )
        log_event(
            logger,
            logging.INFO,
            "sales_import_finished",
            mode="batch",
            total_rows=result.total_rows,
            parsed_rows=result.parsed_rows,
            imported_rows=result.imported_rows,
        )
        return result

    def validate_html(self, html_data: str, options: ImportOptions | None = None) -> ValidationResult:
        """
        Parse without persisting.
        """

        try:
            parse_result = self._parse(html_data, self._resolve_options(options))
        except TableStructureError as exc:
            return ValidationResult(
                valid=False,
                error_message=f"Failed to parse HTML data: {exc}",
                error_details=exc.to_dict(),
            )

        return ValidationResult(
            valid=parse_result.success_count > 0,
            total_rows=parse_result.total_rows,
            valid_rows=parse_result.success_count,
            invalid_rows=parse_result.error_count,
            errors=parse_result.errors,
            warnings=parse_result.warnings,
            errors_truncated=parse_result.errors_truncated,
            warnings_truncated=parse_result.warnings_truncated,
            column_mapping=parse_result.column_mapping,
            data_types_detected=parse_result.statistics.data_types_detected,
            processing_time=parse_result.statistics.processing_time,
        )

    def get_import_statistics(self) -> ImportStatistics:
        stats = self._store.get_stats()
        window_start = self._today() - timedelta(days=self._settings.recent_window_days)
        _, recent_total = self._store.query(SalesRecordFilter(date_from=window_start, limit=0))
        return ImportStatistics(
            total_records=stats.total_records,
            recent_records=recent_total,
            total_sales=stats.total_sales,
            average_price=stats.average_price,
        )

    def get_recent_imports(self, limit: int = 10) -> list[Any]:
        """
        Return the most recently stored records, newest first.
        """

        records, _ = self._store.query(
            SalesRecordFilter(sort_by="created_at", sort_order="desc", limit=limit)
        )
        return records
