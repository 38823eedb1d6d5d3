"""
app/mappers/column_mapper.py

Resolves a table's header row onto the sales fields.

Two strategies share one interface: header matching against a static alias
table, and positional mapping from a preconfigured field order. The strategy
is chosen when the mapper is built.
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from app.domain.sales_record import REQUIRED_SALES_FIELDS, SALES_FIELDS
from app.validators.mapping_validator import (
    ColumnMappingError,
    MappingErrorDetail,
    MappingValidator,
)

# Field -> accepted header aliases, in priority order. Field order matters:
# earlier fields claim columns first.
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "store": (
        "store", "shop", "location", "outlet", "branch", "store name", "shop name",
    ),
    "vendor": (
        "vendor", "supplier", "brand", "manufacturer", "company", "vendor name", "supplier name",
    ),
    "date": (
        "date", "sale date", "transaction date", "order date", "purchase date", "sold date",
    ),
    "description": (
        "description", "item", "product", "item description", "product description",
        "details", "name", "product name",
    ),
    "sale_price": (
        "sale price", "price", "amount", "total", "sale amount", "selling price", "cost", "value",
    ),
    "commission": (
        "commission", "fee", "commission amount", "commission fee", "comm", "commission %",
        "commission rate",
    ),
    "remaining": (
        "remaining", "balance", "remaining balance", "outstanding", "due", "remaining amount",
        "balance due",
    ),
}


def normalize_header(header: str) -> str:
    """
    Normalize a header cell for alias matching.
    """

    return " ".join(header.strip().lower().split())


def header_matches_alias(header: str, alias: str) -> bool:
    """
    Case-insensitive substring match in either direction.
    """

    normalized = normalize_header(header)
    candidate = normalize_header(alias)
    if not normalized or not candidate:
        return False
    return candidate in normalized or normalized in candidate


class MappingStrategy(Protocol):
    context: str

    def resolve(self, headers: Sequence[str]) -> dict[str, int]: ...


class HeaderMatchingStrategy:
    """
    Maps fields by matching header text against known aliases.
    """

    context = "header-based mapping"

    def __init__(
        self,
        *,
        aliases: Mapping[str, Sequence[str]] | None = None,
        strict: bool = False,
    ) -> None:
        self._aliases: dict[str, tuple[str, ...]] = {
            field_name: tuple(values)
            for field_name, values in (aliases or COLUMN_ALIASES).items()
        }
        self._strict = strict

    def resolve(self, headers: Sequence[str]) -> dict[str, int]:
        mapping: dict[str, int] = {}
        claimed: set[int] = set()

        for field_name, aliases in self._aliases.items():
            index = self._find_column(headers, aliases, claimed)
            if index is None:
                if self._strict:
                    raise ColumnMappingError(
                        message=f"column '{field_name}' not found in headers: {list(headers)}",
                        errors=[
                            MappingErrorDetail(
                                code="alias_not_matched",
                                message="No header matched any alias for this field.",
                                canonical_field=field_name,
                                context={"headers": list(headers), "aliases": list(aliases)},
                            )
                        ],
                    )
                continue
            mapping[field_name] = index
            claimed.add(index)

        return mapping

    @staticmethod
    def _find_column(
        headers: Sequence[str],
        aliases: Sequence[str],
        claimed: set[int],
    ) -> int | None:
        for alias in aliases:
            for index, header in enumerate(headers):
                if index in claimed:
                    continue
                if header_matches_alias(header, alias):
                    return index
        return None


class PositionalStrategy:
    """
    Maps fields by position from a preconfigured field order.
    """

    context = "positional mapping"

    def __init__(self, fields: Sequence[str]) -> None:
        normalized = tuple(field_name.strip().lower() for field_name in fields)
        if not normalized:
            raise ValueError("Positional mapping needs at least one field.")
        unknown = [field_name for field_name in normalized if field_name not in SALES_FIELDS]
        if unknown:
            raise ValueError(f"Unknown positional fields: {unknown}. Allowed: {list(SALES_FIELDS)}")
        duplicates = sorted({name for name in normalized if normalized.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate positional fields: {duplicates}")
        self._fields = normalized

    @property
    def fields(self) -> tuple[str, ...]:
        return self._fields

    def resolve(self, headers: Sequence[str]) -> dict[str, int]:
        if len(headers) < len(self._fields):
            raise ColumnMappingError(
                message=(
                    f"insufficient columns: positional mapping expects {len(self._fields)} "
                    f"columns, but only {len(headers)} headers found"
                ),
                errors=[
                    MappingErrorDetail(
                        code="insufficient_columns",
                        message="Fewer physical columns than configured positional fields.",
                        context={"expected": len(self._fields), "found": len(headers)},
                    )
                ],
            )
        return {field_name: index for index, field_name in enumerate(self._fields)}


class ColumnMapper:
    """
    Resolves and validates a column mapping with the configured strategy.
    """

    def __init__(
        self,
        strategy: MappingStrategy | None = None,
        *,
        validator: MappingValidator | None = None,
    ) -> None:
        self.strategy: MappingStrategy = strategy or HeaderMatchingStrategy()
        self._validator = validator or MappingValidator(
            required_fields=REQUIRED_SALES_FIELDS,
            canonical_fields=SALES_FIELDS,
        )

    @property
    def positional_fields(self) -> tuple[str, ...] | None:
        if isinstance(self.strategy, PositionalStrategy):
            return self.strategy.fields
        return None

    def resolve_mapping(self, headers: Sequence[str]) -> dict[str, int]:
        """
        Return field -> column index, or raise ``ColumnMappingError``.
        """

        mapping = self.strategy.resolve(headers)
        self._validator.validate(
            mapping=mapping,
            headers=headers,
            context=self.strategy.context,
        )
        return mapping

    @staticmethod
    def map_row(row: Sequence[str], mapping: Mapping[str, int]) -> dict[str, str]:
        """
        Pick mapped cells out of one grid row; missing cells read as empty.
        """

        return {
            field_name: row[index].strip() if index < len(row) else ""
            for field_name, index in mapping.items()
        }
