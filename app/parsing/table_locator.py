"""
app/parsing/table_locator.py

Table selection and cell-grid extraction over a parsed markup tree.

The locator only needs four capabilities from a markup library, captured by
``MarkupTree``. ``SoupMarkupTree`` provides them with BeautifulSoup.
"""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from bs4 import BeautifulSoup, Tag

from app.parsing.errors import EmptyTableError, NoTableFoundError

CellGrid = list[list[str]]


class MarkupTree(Protocol):
    def find_tables(self) -> Sequence[Any]: ...

    def find_rows(self, table: Any) -> Sequence[Any]: ...

    def find_cells(self, row: Any) -> Sequence[Any]: ...

    def cell_text(self, cell: Any) -> str: ...


class SoupMarkupTree:
    """
    ``MarkupTree`` backed by BeautifulSoup's lenient ``html.parser`` builder.
    """

    def __init__(self, markup: str, *, features: str = "html.parser") -> None:
        self._soup = BeautifulSoup(markup, features)

    def find_tables(self) -> list[Tag]:
        return self._soup.find_all("table")

    def find_rows(self, table: Tag) -> list[Tag]:
        return table.find_all("tr")

    def find_cells(self, row: Tag) -> list[Tag]:
        return row.find_all(["td", "th"])

    def cell_text(self, cell: Tag) -> str:
        return cell.get_text()


def select_best_table(tree: MarkupTree, tables: Sequence[Any]) -> Any:
    """
    Pick the table with the most rows; the first one wins ties.
    """

    best = tables[0]
    best_rows = len(tree.find_rows(best))
    for table in tables[1:]:
        row_count = len(tree.find_rows(table))
        if row_count > best_rows:
            best = table
            best_rows = row_count
    return best


def locate_table(tree: MarkupTree) -> tuple[Any, int]:
    """
    Return the data table and the number of tables seen.
    """

    tables = tree.find_tables()
    if not tables:
        raise NoTableFoundError("no HTML tables found in the provided data")
    return select_best_table(tree, tables), len(tables)


def extract_grid(tree: MarkupTree, table: Any) -> CellGrid:
    """
    Walk the table's rows into trimmed cell strings, dropping empty rows.
    """

    grid: CellGrid = []
    for row in tree.find_rows(table):
        cells = [tree.cell_text(cell).strip() for cell in tree.find_cells(row)]
        if cells:
            grid.append(cells)
    if not grid:
        raise EmptyTableError("no data rows found in table")
    return grid
