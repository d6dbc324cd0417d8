"""Coercion helpers shared by the repositories' ``_row_to_entity`` methods.

Supabase returns JSON-decoded rows (ISO strings for timestamps), PostgreSQL
returns native values (datetime, UUID); both pass through here.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any, TypeVar

from src.domain.errors import MalformedRecordError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def require_id(row: dict) -> str:
    value = row.get("id")
    if value is None or value == "":
        raise MalformedRecordError("row has no id")
    return str(value)


def require_str(row: dict, key: str) -> str:
    value = row.get(key)
    if not isinstance(value, str):
        raise MalformedRecordError(f"row {row.get('id')!r}: {key!r} must be a string")
    return value


def optional_str(row: dict, key: str, default: str | None = None) -> str | None:
    value = row.get(key)
    if value is None or value == "":
        return default
    if not isinstance(value, str):
        raise MalformedRecordError(f"row {row.get('id')!r}: {key!r} must be a string")
    return value


def tag_list(value: Any) -> list[str]:
    # absent or non-list tag columns become []; non-string and blank entries are dropped
    if not isinstance(value, (list, tuple)):
        return []
    return [t for t in value if isinstance(t, str) and t.strip()]


def timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError as exc:
            raise MalformedRecordError(f"bad timestamp {value!r}") from exc
    raise MalformedRecordError(f"bad timestamp {value!r}")


def map_rows(rows: Iterable[dict], convert: Callable[[dict], T], collection: str) -> list[T]:
    """Convert rows, logging and skipping those that do not validate."""
    out: list[T] = []
    for row in rows:
        try:
            out.append(convert(row))
        except MalformedRecordError as exc:
            logger.warning("Skipping malformed %s row: %s", collection, exc)
    return out


def backend_message(exc: Exception) -> str:
    # postgrest APIError keeps the server text on .message
    return getattr(exc, "message", None) or str(exc)
