"""
app/validators/row_decoder.py

Row-level decoding and type coercion for mapped sales rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping

from app.domain.sales_record import ParseIssue, SalesRecordInput
from app.parsing.coercion import CurrencyFormatError, DateFormatError, parse_currency, parse_date

_ZERO = Decimal("0.00")

_FIELD_LABELS: dict[str, str] = {
    "store": "Store",
    "vendor": "Vendor",
    "date": "Date",
    "description": "Description",
    "sale_price": "Sale price",
    "commission": "Commission",
    "remaining": "Remaining",
}


@dataclass(frozen=True)
class RowDecodeOutcome:
    """
    Either a record or a non-empty error list, plus any warnings.
    """

    record: SalesRecordInput | None
    errors: list[ParseIssue] = field(default_factory=list)
    warnings: list[ParseIssue] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return bool(self.errors)


class SalesRowDecoder:
    """
    Validates and coerces one mapped row into a ``SalesRecordInput``.
    """

    def decode_row(
        self,
        *,
        mapped_row: Mapping[str, str],
        row_number: int,
    ) -> RowDecodeOutcome:
        errors: list[ParseIssue] = []
        warnings: list[ParseIssue] = []

        store = self._parse_required_text(mapped_row, "store", row_number, errors)
        vendor = self._parse_required_text(mapped_row, "vendor", row_number, errors)
        date = self._parse_date(mapped_row.get("date", ""), row_number, errors)
        description = self._parse_required_text(mapped_row, "description", row_number, errors)
        sale_price = self._parse_sale_price(mapped_row.get("sale_price", ""), row_number, errors)
        commission = self._parse_optional_amount(mapped_row, "commission", row_number, warnings)
        remaining = self._parse_optional_amount(mapped_row, "remaining", row_number, warnings)

        if errors:
            return RowDecodeOutcome(record=None, errors=errors, warnings=warnings)

        return RowDecodeOutcome(
            record=SalesRecordInput(
                store=store,
                vendor=vendor,
                date=date,
                description=description,
                sale_price=sale_price,
                commission=commission,
                remaining=remaining,
            ),
            warnings=warnings,
        )

    @staticmethod
    def _required_empty(column: str, row_number: int) -> ParseIssue:
        return ParseIssue(
            row=row_number,
            column=column,
            message=f"{_FIELD_LABELS[column]} field is required but empty",
        )

    def _parse_required_text(
        self,
        mapped_row: Mapping[str, str],
        column: str,
        row_number: int,
        errors: list[ParseIssue],
    ) -> str:
        value = (mapped_row.get(column) or "").strip()
        if not value:
            errors.append(self._required_empty(column, row_number))
        return value

    def _parse_date(self, raw: str | None, row_number: int, errors: list[ParseIssue]) -> str:
        value = (raw or "").strip()
        if not value:
            errors.append(self._required_empty("date", row_number))
            return ""
        try:
            return parse_date(value)
        except DateFormatError as exc:
            errors.append(
                ParseIssue(
                    row=row_number,
                    column="date",
                    message=f"Invalid date format: {exc}",
                    value=value,
                )
            )
            return ""

    def _parse_sale_price(
        self,
        raw: str | None,
        row_number: int,
        errors: list[ParseIssue],
    ) -> Decimal:
        value = (raw or "").strip()
        if not value:
            errors.append(self._required_empty("sale_price", row_number))
            return _ZERO
        try:
            amount = parse_currency(value)
        except CurrencyFormatError as exc:
            errors.append(
                ParseIssue(
                    row=row_number,
                    column="sale_price",
                    message=f"Invalid sale price format: {exc}",
                    value=value,
                )
            )
            return _ZERO
        if amount < 0:
            errors.append(
                ParseIssue(
                    row=row_number,
                    column="sale_price",
                    message="Sale price must be non-negative",
                    value=value,
                )
            )
            return _ZERO
        return amount

    def _parse_optional_amount(
        self,
        mapped_row: Mapping[str, str],
        column: str,
        row_number: int,
        warnings: list[ParseIssue],
    ) -> Decimal:
        value = (mapped_row.get(column) or "").strip()
        if not value:
            return _ZERO
        try:
            amount = parse_currency(value)
        except CurrencyFormatError as exc:
            reason = str(exc)
        else:
            if amount >= 0:
                return amount
            reason = "negative amount"
        warnings.append(
            ParseIssue(
                row=row_number,
                column=column,
                message=f"Invalid {column} format, using 0.00: {reason}",
                value=value,
            )
        )
        return _ZERO
