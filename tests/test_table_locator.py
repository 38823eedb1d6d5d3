"""
tests/test_table_locator.py
"""

from __future__ import annotations

import unittest

from app.parsing.errors import EmptyTableError, NoTableFoundError
from app.parsing.table_locator import SoupMarkupTree, extract_grid, locate_table


class TestLocateTable(unittest.TestCase):
    def test_raises_when_no_table_present(self) -> None:
        with self.assertRaises(NoTableFoundError) as ctx:
            locate_table(SoupMarkupTree("<div>This is not a table</div>"))

        self.assertIn("no HTML tables found", str(ctx.exception))
        self.assertEqual(ctx.exception.to_dict()["code"], "no_table_found")

    def test_picks_table_with_most_rows(self) -> None:
        tree = SoupMarkupTree(
            "<table><tr><td>small</td></tr></table>"
            "<table><tr><td>big</td></tr><tr><td>bigger</td></tr></table>"
        )

        table, found = locate_table(tree)

        self.assertEqual(found, 2)
        self.assertEqual(extract_grid(tree, table), [["big"], ["bigger"]])

    def test_first_table_wins_ties(self) -> None:
        tree = SoupMarkupTree(
            "<table><tr><td>first</td></tr></table>"
            "<table><tr><td>second</td></tr></table>"
        )

        table, _ = locate_table(tree)

        self.assertEqual(extract_grid(tree, table), [["first"]])


class TestExtractGrid(unittest.TestCase):
    def test_trims_cells_and_concatenates_nested_text(self) -> None:
        tree = SoupMarkupTree(
            "<table><tr><td>  Downtown <b>Store</b>  </td><th> Vendor </th></tr></table>"
        )
        table, _ = locate_table(tree)

        self.assertEqual(extract_grid(tree, table), [["Downtown Store", "Vendor"]])

    def test_keeps_inner_whitespace(self) -> None:
        tree = SoupMarkupTree("<table><tr><td> Store  A </td><td>Line\nTwo</td></tr></table>")
        table, _ = locate_table(tree)

        self.assertEqual(extract_grid(tree, table), [["Store  A", "Line\nTwo"]])

    def test_drops_rows_without_cells(self) -> None:
        tree = SoupMarkupTree(
            "<table><tr></tr><tr><td>a</td></tr><tr></tr><tr><td>b</td><td>c</td></tr></table>"
        )
        table, _ = locate_table(tree)

        self.assertEqual(extract_grid(tree, table), [["a"], ["b", "c"]])

    def test_raises_when_table_has_no_cells(self) -> None:
        tree = SoupMarkupTree("<table><tr></tr></table>")
        table, _ = locate_table(tree)

        with self.assertRaises(EmptyTableError):
            extract_grid(tree, table)


if __name__ == "__main__":
    unittest.main()
