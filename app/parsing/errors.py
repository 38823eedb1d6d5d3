"""
app/parsing/errors.py

Structural parse failures. Any of these aborts the whole parse.
"""

from __future__ import annotations

from typing import Any


class TableStructureError(ValueError):
    """
    Raised when the input cannot be turned into a mapped cell grid.
    """

    code = "table_structure"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.code, "errors": []}


class NoTableFoundError(TableStructureError):
    code = "no_table_found"


class EmptyTableError(TableStructureError):
    code = "empty_table"
