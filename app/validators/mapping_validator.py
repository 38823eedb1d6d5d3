"""
app/validators/mapping_validator.py

Validation for resolved column mappings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from app.parsing.errors import TableStructureError


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping error detail.
    """

    code: str
    message: str
    canonical_field: str | None = None
    column_index: int | None = None
    context: dict[str, Any] | None = None


class ColumnMappingError(TableStructureError):
    """
    Raised when the header row cannot be mapped onto the sales fields.
    """

    code = "column_mapping"

    def __init__(self, *, message: str, errors: Sequence[MappingErrorDetail]) -> None:
        super().__init__(message)
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "canonical_field": error.canonical_field,
                    "column_index": error.column_index,
                    "context": error.context,
                }
                for error in self.errors
            ],
        }


class MappingValidator:
    """
    Validates resolved field-to-column mappings.
    """

    def __init__(
        self,
        *,
        required_fields: Sequence[str],
        canonical_fields: Sequence[str],
    ) -> None:
        self._required_fields = tuple(required_fields)
        self._canonical_fields = tuple(canonical_fields)
        self._canonical_set = set(self._canonical_fields)

    def validate(
        self,
        *,
        mapping: dict[str, int],
        headers: Sequence[str],
        context: str,
        pre_errors: Sequence[MappingErrorDetail] | None = None,
    ) -> None:
        """
        Validate mapping and raise structured errors if invalid.
        """

        errors: list[MappingErrorDetail] = list(pre_errors or [])

        for canonical_field, column_index in mapping.items():
            if canonical_field not in self._canonical_set:
                errors.append(
                    MappingErrorDetail(
                        code="invalid_canonical_field",
                        message="Unknown field in mapping.",
                        canonical_field=canonical_field,
                        column_index=column_index,
                    )
                )
            if not 0 <= column_index < len(headers):
                errors.append(
                    MappingErrorDetail(
                        code="column_out_of_range",
                        message="Mapped column index is outside the header row.",
                        canonical_field=canonical_field,
                        column_index=column_index,
                    )
                )

        missing_required = [field for field in self._required_fields if field not in mapping]
        for required in missing_required:
            errors.append(
                MappingErrorDetail(
                    code="required_field_unmapped",
                    message="Required field is not mapped.",
                    canonical_field=required,
                    context={"headers": list(headers)},
                )
            )

        if errors:
            if missing_required:
                message = (
                    f"{context} missing required columns: [{', '.join(missing_required)}]. "
                    f"Available headers: {list(headers)}"
                )
            else:
                message = f"{context} failed: {errors[0].message}"
            raise ColumnMappingError(message=message, errors=errors)
