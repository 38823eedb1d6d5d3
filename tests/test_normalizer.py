"""
tests/test_normalizer.py

Input normalization: bare rows, delimited text and pass-through markup.
"""

from __future__ import annotations

import pytest

from app.domain.sales_record import CONSIGNABLE_COLUMNS
from app.parsing.normalizer import (
    convert_delimited,
    detect_delimiter,
    looks_like_table_rows,
    normalize_input,
)


class TestLooksLikeTableRows:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("<tr><td>a</td></tr>", True),
            ("<TR class='odd'><td>a</td></TR>", True),
            ("<tbody><tr><td>a</td></tr></tbody>", True),
            ("<table><tr><td>a</td></tr></table>", False),
            ("<div>no rows</div>", False),
            ("plain text", False),
        ],
    )
    def test_detection(self, text: str, expected: bool) -> None:
        assert looks_like_table_rows(text) is expected


class TestDetectDelimiter:
    def test_tab_preferred_over_pipe(self) -> None:
        assert detect_delimiter("a\tb|c") == "\t"

    def test_pipe(self) -> None:
        assert detect_delimiter("a | b | c") == "|"

    def test_none(self) -> None:
        assert detect_delimiter("a, b, c") is None


class TestNormalizeInput:
    def test_whitespace_only_passes_through(self) -> None:
        assert normalize_input("   \n  ") == "   \n  "

    def test_full_table_passes_through(self) -> None:
        markup = "<table><tr><th>Store</th></tr></table>"
        assert normalize_input(markup) == markup

    def test_bare_rows_are_wrapped_without_header(self) -> None:
        markup = normalize_input("<tr><td>a</td></tr>")

        assert markup.startswith("<table>")
        assert markup.endswith("</table>")
        assert "<thead>" not in markup
        assert "<tr><td>a</td></tr>" in markup

    def test_bare_rows_get_synthetic_header_for_positional_columns(self) -> None:
        markup = normalize_input("<tr><td>a</td></tr>", CONSIGNABLE_COLUMNS)

        assert "<thead><tr><th>Store</th><th>Vendor</th><th>Date</th>" in markup
        assert "<th>Sale Price</th><th>Commission</th><th>Remaining</th></tr></thead>" in markup

    def test_tab_delimited_text_becomes_table(self) -> None:
        markup = normalize_input("Store\tVendor\nA\tB\n")

        assert markup == (
            "<table><thead><tr><th>Store</th><th>Vendor</th></tr></thead>"
            "<tbody><tr><td>A</td><td>B</td></tr></tbody></table>"
        )

    def test_pipe_delimited_text_becomes_table(self) -> None:
        markup = normalize_input("Store | Vendor\nA | B")

        assert "<th>Store</th><th>Vendor</th>" in markup
        assert "<td>A</td><td>B</td>" in markup

    def test_text_without_delimiter_passes_through(self) -> None:
        assert normalize_input("just some words") == "just some words"


class TestConvertDelimited:
    def test_escapes_markup_and_skips_blank_lines(self) -> None:
        markup = convert_delimited("Vendor\tNote\n\nHome & Garden\t<b>x</b>\n", "\t")

        assert "<td>Home &amp; Garden</td>" in markup
        assert "<td>&lt;b&gt;x&lt;/b&gt;</td>" in markup
        assert markup.count("<tr>") == 2

    def test_keeps_leading_empty_cells(self) -> None:
        markup = convert_delimited("A\tB\n\tvalue", "\t")

        assert "<tr><td></td><td>value</td></tr>" in markup
