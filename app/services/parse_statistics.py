"""
app/services/parse_statistics.py

Advisory column statistics attached to a parse result.

Nothing here feeds back into decoding; the detected types only annotate the
result for callers that want to preview a paste before importing it.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from app.domain.sales_record import SalesRecordInput, ValueRange
from app.parsing.coercion import looks_like_currency, looks_like_date, looks_like_number

SAMPLE_ROWS = 5

# Checked in this order; a column that clears the majority bar for both date
# and currency is reported as date.
TYPE_CHECKS = (
    ("date", looks_like_date),
    ("currency", looks_like_currency),
    ("number", looks_like_number),
)

AMOUNT_FIELDS: tuple[str, ...] = ("sale_price", "commission", "remaining")


def detect_data_type(values: Sequence[str]) -> str:
    """
    Classify sampled cell values as date, currency, number, or text.

    A type needs a strict majority of the samples; blank samples count
    towards the total but never towards a type.
    """

    if not values:
        return "unknown"

    counts = {name: 0 for name, _ in TYPE_CHECKS}
    for raw in values:
        value = raw.strip()
        if not value:
            continue
        for name, check in TYPE_CHECKS:
            if check(value):
                counts[name] += 1

    threshold = len(values) // 2
    for name, _ in TYPE_CHECKS:
        if counts[name] > threshold:
            return name
    return "text"


def detect_column_types(grid: Sequence[Sequence[str]]) -> dict[str, str]:
    """
    Map each header to the type detected from the first few data rows.
    """

    if len(grid) < 2:
        return {}

    headers = grid[0]
    first_data_row = grid[1]
    detected: dict[str, str] = {}
    for index, header in enumerate(headers):
        if index >= len(first_data_row):
            continue
        samples = [row[index] for row in grid[1 : SAMPLE_ROWS + 1] if index < len(row)]
        detected[header] = detect_data_type(samples)
    return detected


def compute_value_ranges(records: Sequence[SalesRecordInput]) -> dict[str, ValueRange]:
    ranges: dict[str, ValueRange] = {}
    for field_name in AMOUNT_FIELDS:
        values: list[Decimal] = [getattr(record, field_name) for record in records]
        if not values:
            ranges[field_name] = ValueRange(min=None, max=None, count=0)
            continue
        ranges[field_name] = ValueRange(min=min(values), max=max(values), count=len(values))
    return ranges
