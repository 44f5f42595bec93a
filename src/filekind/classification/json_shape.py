"""Infer whether a JSON payload is tabular or document shaped."""

from __future__ import annotations

import json
import logging
from typing import Any

from .models import JSONShape

LOGGER = logging.getLogger(__name__)

_DOCUMENT_ROW_KEYS = ("collection", "document")
_TABLE_ROW_KEYS = ("table", "rows")
_TABLE_ROOT_KEYS = ("tables", "schema")


def _reject_constant(token: str) -> None:
    raise ValueError(f"{token} is not valid JSON")


def _is_record_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, dict) for item in value)


def classify_json_shape(content: str) -> JSONShape:
    """Classify raw JSON text as SQL-like, NoSQL-like, or corrupted.

    Arrays of objects are judged by the keys of their first element only.
    Payloads without relational markers default to ``JSONShape.NOSQL``.

    Args:
        content: Text believed to contain a JSON document.

    Returns:
        JSONShape: Inferred shape; ``JSONShape.CORRUPTED`` when parsing fails.
    """
    try:
        parsed = json.loads(content, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        LOGGER.debug("JSON parse failed: %s", exc)
        return JSONShape.CORRUPTED

    if _is_record_list(parsed):
        keys = parsed[0].keys() if parsed else ()
        if any(key in keys for key in _DOCUMENT_ROW_KEYS):
            return JSONShape.NOSQL
        if any(key in keys for key in _TABLE_ROW_KEYS):
            return JSONShape.SQL
    elif isinstance(parsed, dict) and any(key in parsed for key in _TABLE_ROOT_KEYS):
        return JSONShape.SQL

    return JSONShape.NOSQL


__all__ = ["classify_json_shape"]
