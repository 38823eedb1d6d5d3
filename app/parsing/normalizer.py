"""
app/parsing/normalizer.py

Rewrites raw pasted input into one canonical ``<table>`` markup form.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Sequence

logger = logging.getLogger(__name__)

DISPLAY_COLUMN_NAMES: dict[str, str] = {
    "store": "Store",
    "vendor": "Vendor",
    "date": "Date",
    "description": "Description",
    "sale_price": "Sale Price",
    "commission": "Commission",
    "remaining": "Remaining",
}

_DELIMITERS: tuple[str, ...] = ("\t", "|")


def display_column_name(field_name: str) -> str:
    return DISPLAY_COLUMN_NAMES.get(field_name, field_name)


def looks_like_table_rows(text: str) -> bool:
    """
    Return True when the text has ``<tr>`` rows but no enclosing ``<table>``.
    """

    lowered = text.lower()
    return "<tr" in lowered and "<table" not in lowered


def detect_delimiter(first_line: str) -> str | None:
    for delimiter in _DELIMITERS:
        if delimiter in first_line:
            return delimiter
    return None


def normalize_input(raw: str, positional_columns: Sequence[str] | None = None) -> str:
    """
    Return markup that contains a taggable table, or the input unchanged.

    Bare rows are wrapped in a synthetic table; when positional columns are
    configured a header row is synthesized from their display names so the
    header slot of the grid stays consistent. Tab or pipe delimited text is
    converted line by line with line 1 as the header.
    """

    cleaned = raw.strip()
    if not cleaned:
        return raw

    if looks_like_table_rows(cleaned):
        logger.debug("Wrapping bare table rows positional=%s", bool(positional_columns))
        return wrap_table_rows(cleaned, positional_columns)

    lowered = cleaned.lower()
    if "<table" not in lowered and "<tr" not in lowered:
        first_line = cleaned.split("\n", 1)[0]
        delimiter = detect_delimiter(first_line)
        if delimiter is not None:
            logger.debug("Converting delimited text delimiter=%r", delimiter)
            return convert_delimited(cleaned, delimiter)

    return raw


def wrap_table_rows(rows_markup: str, positional_columns: Sequence[str] | None = None) -> str:
    parts = ["<table>"]
    if positional_columns:
        header_cells = "".join(
            f"<th>{html.escape(display_column_name(column))}</th>"
            for column in positional_columns
        )
        parts.append(f"<thead><tr>{header_cells}</tr></thead>")
    parts.append("<tbody>")
    parts.append(rows_markup)
    parts.append("</tbody></table>")
    return "".join(parts)


def convert_delimited(text: str, delimiter: str) -> str:
    parts = ["<table>"]
    header_written = False
    for raw_line in text.splitlines():
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            continue
        cells = [html.escape(cell.strip()) for cell in line.split(delimiter)]
        if not header_written:
            parts.append("<thead><tr>")
            parts.extend(f"<th>{cell}</th>" for cell in cells)
            parts.append("</tr></thead><tbody>")
            header_written = True
        else:
            parts.append("<tr>")
            parts.extend(f"<td>{cell}</td>" for cell in cells)
            parts.append("</tr>")
    parts.append("</tbody></table>")
    return "".join(parts)
