"""
app/parsing package marker.
"""

from app.parsing.coercion import CurrencyFormatError, DateFormatError, parse_currency, parse_date
from app.parsing.errors import EmptyTableError, NoTableFoundError, TableStructureError
from app.parsing.normalizer import normalize_input
from app.parsing.table_locator import MarkupTree, SoupMarkupTree, extract_grid, locate_table

__all__ = [
    "CurrencyFormatError",
    "DateFormatError",
    "EmptyTableError",
    "MarkupTree",
    "NoTableFoundError",
    "SoupMarkupTree",
    "TableStructureError",
    "extract_grid",
    "locate_table",
    "normalize_input",
    "parse_currency",
    "parse_date",
]
