"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _get_optional_positive_int_env(name: str) -> int | None:
    """
    Read an optional positive integer; anything else means no limit.
    """

    raw_value = _get_optional_str_env(name)
    if raw_value is None:
        return None
    try:
        value = int(raw_value)
    except ValueError:
        return None
    return value if value > 0 else None


def _get_csv_env(name: str) -> tuple[str, ...]:
    raw_value = _get_optional_str_env(name)
    if raw_value is None:
        return ()
    return tuple(item.strip() for item in raw_value.split(",") if item.strip())


@dataclass(frozen=True)
class SalesImportSettings:
    """
    Runtime defaults for sales table imports.

    Per-request ``ImportOptions`` override the mapping related values.
    ``max_parse_issues=None`` keeps every row issue on the result.
    """

    strict_mode: bool = False
    consignable_format: bool = False
    positional_columns: tuple[str, ...] = ()
    use_batch_import: bool = False
    max_parse_issues: int | None = None
    log_parse_issues: bool = False
    recent_window_days: int = 30


@dataclass(frozen=True)
class DatabaseSettings:
    """
    Schema bootstrap settings.
    """

    auto_create_schema: bool = True


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"


@lru_cache(maxsize=1)
def get_sales_import_settings() -> SalesImportSettings:
    """
    Return cached sales import settings from environment variables.
    """

    return SalesImportSettings(
        strict_mode=_get_bool_env("SALES_IMPORT_STRICT_MODE", False),
        consignable_format=_get_bool_env("SALES_IMPORT_CONSIGNABLE_FORMAT", False),
        positional_columns=_get_csv_env("SALES_IMPORT_POSITIONAL_COLUMNS"),
        use_batch_import=_get_bool_env("SALES_IMPORT_USE_BATCH", False),
        max_parse_issues=_get_optional_positive_int_env("SALES_IMPORT_MAX_PARSE_ISSUES"),
        log_parse_issues=_get_bool_env("SALES_IMPORT_LOG_PARSE_ISSUES", False),
        recent_window_days=max(1, _get_int_env("SALES_IMPORT_RECENT_WINDOW_DAYS", 30)),
    )


@lru_cache(maxsize=1)
def get_database_settings() -> DatabaseSettings:
    """
    Return cached schema bootstrap settings.
    """

    return DatabaseSettings(
        auto_create_schema=_get_bool_env("DB_AUTO_CREATE_SCHEMA", True),
    )


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings(level=_get_str_env("LOG_LEVEL", "INFO").upper())
