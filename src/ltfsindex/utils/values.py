"""Helpers for turning raw index text into typed values."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Mapping
from urllib.parse import unquote

from ltfsindex.config import DEFAULT_PARTITION
from ltfsindex.errors import IndexFormatError

_TIMESTAMP_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})$"
)
_PARTITION_LETTER_RE = re.compile(r"^[A-Za-z]$")


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


def coerce_count(value: Any, default: int = 0) -> int:
    """Return a non-negative integer, or ``default`` when that is not possible."""
    text = _text(value)
    if text is None:
        return default
    try:
        number = int(text)
    except ValueError:
        return default
    return number if number >= 0 else default


def coerce_partition(value: Any, default: str = DEFAULT_PARTITION) -> str:
    """Return the canonical partition id.

    Numeric ids are normalized to their decimal form, single letters are
    lower-cased, anything else falls back to ``default``.
    """
    text = _text(value)
    if text is None:
        return default
    if _PARTITION_LETTER_RE.match(text):
        return text.lower()
    try:
        number = int(text)
    except ValueError:
        return default
    return str(number) if number >= 0 else default


def parse_timestamp(value: Any, *, field: str = "timestamp") -> datetime:
    """Parse an LTFS timestamp into an aware UTC datetime.

    LTFS writes nanosecond precision; digits past microseconds are dropped.
    """
    text = _text(value)
    match = _TIMESTAMP_RE.match(text) if text else None
    if match is None:
        raise IndexFormatError(f"Malformed {field}: {value!r}")

    fraction = (match.group("fraction") or "")[:6].ljust(6, "0")
    zone = match.group("zone")
    if zone == "Z":
        zone = "+00:00"
    try:
        parsed = datetime.fromisoformat(f"{match.group('base')}.{fraction}{zone}")
    except ValueError as exc:
        raise IndexFormatError(f"Malformed {field}: {value!r}") from exc
    return parsed.astimezone(timezone.utc)


def is_true(value: Any) -> bool:
    return _text(value) == "true"


def is_false(value: Any) -> bool:
    return _text(value) == "false"


def read_name(node: Any) -> str | None:
    """Return the name stored in a ``name`` node, or None when there is none.

    Names are kept exactly as written. A node carrying
    ``percentencoded="true"`` is decoded.
    """
    if isinstance(node, str):
        return node or None
    if isinstance(node, Mapping):
        content = node.get("content")
        if not isinstance(content, str) or not content:
            return None
        if is_true(node.get("percentencoded")):
            return unquote(content)
        return content
    return None
