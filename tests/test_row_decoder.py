"""
tests/test_row_decoder.py

Per-field rules for decoding one mapped row.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from app.validators.row_decoder import SalesRowDecoder


def _row(**overrides: str) -> dict[str, str]:
    row = {
        "store": "Downtown Store",
        "vendor": "Electronics Plus",
        "date": "Jan 15, 2024",
        "description": "Samsung TV",
        "sale_price": "$899.99",
        "commission": "$89.99",
        "remaining": "$810.00",
    }
    row.update(overrides)
    return row


@pytest.fixture()
def decoder() -> SalesRowDecoder:
    return SalesRowDecoder()


class TestValidRows:
    def test_decodes_all_fields(self, decoder: SalesRowDecoder) -> None:
        outcome = decoder.decode_row(mapped_row=_row(), row_number=1)

        assert not outcome.failed
        assert outcome.warnings == []
        record = outcome.record
        assert record is not None
        assert record.date == "2024-01-15"
        assert record.sale_price == Decimal("899.99")
        assert record.commission == Decimal("89.99")
        assert record.remaining == Decimal("810.00")

    def test_optional_fields_default_to_zero_when_absent(self, decoder: SalesRowDecoder) -> None:
        row = _row()
        del row["commission"]
        row["remaining"] = ""

        outcome = decoder.decode_row(mapped_row=row, row_number=3)

        assert outcome.record is not None
        assert outcome.record.commission == Decimal("0.00")
        assert outcome.record.remaining == Decimal("0.00")
        assert outcome.warnings == []


class TestRowErrors:
    @pytest.mark.parametrize(
        ("field_name", "label"),
        [
            ("store", "Store"),
            ("vendor", "Vendor"),
            ("date", "Date"),
            ("description", "Description"),
            ("sale_price", "Sale price"),
        ],
    )
    def test_required_field_empty(self, decoder: SalesRowDecoder, field_name: str, label: str) -> None:
        outcome = decoder.decode_row(mapped_row=_row(**{field_name: "  "}), row_number=2)

        assert outcome.failed
        assert outcome.record is None
        assert len(outcome.errors) == 1
        issue = outcome.errors[0]
        assert issue.row == 2
        assert issue.column == field_name
        assert issue.message == f"{label} field is required but empty"

    def test_invalid_date_keeps_original_value(self, decoder: SalesRowDecoder) -> None:
        outcome = decoder.decode_row(mapped_row=_row(date="invalid-date"), row_number=1)

        assert outcome.failed
        assert outcome.errors[0].column == "date"
        assert outcome.errors[0].value == "invalid-date"
        assert outcome.errors[0].message.startswith("Invalid date format")

    def test_invalid_sale_price(self, decoder: SalesRowDecoder) -> None:
        outcome = decoder.decode_row(mapped_row=_row(sale_price="not-a-price"), row_number=1)

        assert outcome.failed
        assert outcome.errors[0].column == "sale_price"
        assert outcome.errors[0].value == "not-a-price"

    def test_negative_sale_price_is_an_error(self, decoder: SalesRowDecoder) -> None:
        outcome = decoder.decode_row(mapped_row=_row(sale_price="(50.00)"), row_number=1)

        assert outcome.failed
        assert outcome.errors[0].message == "Sale price must be non-negative"

    def test_collects_every_error_in_the_row(self, decoder: SalesRowDecoder) -> None:
        outcome = decoder.decode_row(
            mapped_row=_row(store="", date="invalid-date", sale_price="not-a-price"),
            row_number=1,
        )

        assert [issue.column for issue in outcome.errors] == ["store", "date", "sale_price"]


class TestRowWarnings:
    def test_bad_optional_amount_is_a_warning(self, decoder: SalesRowDecoder) -> None:
        outcome = decoder.decode_row(mapped_row=_row(commission="ten percent"), row_number=4)

        assert not outcome.failed
        assert outcome.record is not None
        assert outcome.record.commission == Decimal("0.00")
        assert len(outcome.warnings) == 1
        warning = outcome.warnings[0]
        assert warning.row == 4
        assert warning.column == "commission"
        assert warning.value == "ten percent"
        assert warning.message.startswith("Invalid commission format, using 0.00")

    def test_negative_optional_amount_is_a_warning(self, decoder: SalesRowDecoder) -> None:
        outcome = decoder.decode_row(mapped_row=_row(remaining="(5.00)"), row_number=1)

        assert outcome.record is not None
        assert outcome.record.remaining == Decimal("0.00")
        assert outcome.warnings[0].column == "remaining"

    def test_row_with_errors_still_reports_warnings(self, decoder: SalesRowDecoder) -> None:
        outcome = decoder.decode_row(mapped_row=_row(vendor="", remaining="n/a"), row_number=1)

        assert outcome.failed
        assert len(outcome.errors) == 1
        assert len(outcome.warnings) == 1
