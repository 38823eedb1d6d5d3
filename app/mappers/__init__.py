"""
app/mappers package marker.
"""

from app.mappers.column_mapper import (
    COLUMN_ALIASES,
    ColumnMapper,
    HeaderMatchingStrategy,
    MappingStrategy,
    PositionalStrategy,
)

__all__ = [
    "COLUMN_ALIASES",
    "ColumnMapper",
    "HeaderMatchingStrategy",
    "MappingStrategy",
    "PositionalStrategy",
]
