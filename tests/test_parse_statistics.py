from __future__ import annotations

from decimal import Decimal

import pytest

from app.domain.sales_record import SalesRecordInput
from app.services.parse_statistics import compute_value_ranges, detect_column_types, detect_data_type


class TestDetectDataType:
    @pytest.mark.parametrize(
        ("values", "expected"),
        [
            (["2024-01-15", "01/16/2024", "Jan 17, 2024"], "date"),
            (["$100.00", "$200", "50.00"], "currency"),
            (["1", "2", "3,000"], "number"),
            (["Store A", "Store B"], "text"),
            ([], "unknown"),
            (["2024-01-15", "Store", "Other"], "text"),
        ],
    )
    def test_majority_vote(self, values: list[str], expected: str) -> None:
        assert detect_data_type(values) == expected

    def test_even_split_is_not_a_majority(self) -> None:
        assert detect_data_type(["2024-01-15", "2024-01-16", "x", "y"]) == "text"

    def test_blank_samples_count_against_every_type(self) -> None:
        assert detect_data_type(["", "", "2024-01-15"]) == "text"

    def test_date_checked_before_currency(self) -> None:
        assert detect_data_type(["2024-01-15", "2024-01-16", "$5.00"]) == "date"


class TestDetectColumnTypes:
    def test_keys_by_header_and_skips_columns_beyond_first_data_row(self) -> None:
        grid = [
            ["Store", "Date", "Price", "Extra"],
            ["A", "2024-01-15", "$1.00"],
            ["B", "2024-01-16", "$2.00", "x"],
        ]

        assert detect_column_types(grid) == {"Store": "text", "Date": "date", "Price": "currency"}

    def test_header_only_grid(self) -> None:
        assert detect_column_types([["Store"]]) == {}

    def test_samples_at_most_five_rows(self) -> None:
        grid = [["Value"]] + [["text"]] * 5 + [["2024-01-15"]] * 20

        assert detect_column_types(grid) == {"Value": "text"}


def test_value_ranges() -> None:
    records = [
        SalesRecordInput("A", "B", "2024-01-01", "x", Decimal("5.00"), Decimal("1.00")),
        SalesRecordInput("A", "B", "2024-01-02", "y", Decimal("15.00")),
    ]

    ranges = compute_value_ranges(records)

    assert ranges["sale_price"].min == Decimal("5.00")
    assert ranges["sale_price"].max == Decimal("15.00")
    assert ranges["commission"].min == Decimal("0.00")
    assert ranges["remaining"].count == 2
    assert compute_value_ranges([])["sale_price"].count == 0
