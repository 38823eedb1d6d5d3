"""
app/validators package marker.
"""

from app.validators.mapping_validator import ColumnMappingError, MappingErrorDetail, MappingValidator
from app.validators.row_decoder import RowDecodeOutcome, SalesRowDecoder

__all__ = [
    "ColumnMappingError",
    "MappingErrorDetail",
    "MappingValidator",
    "RowDecodeOutcome",
    "SalesRowDecoder",
]
