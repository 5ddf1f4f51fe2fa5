"""Extent reconciliation.

Tape writers in the wild leave extent information out, duplicate it, or
write values that are not numbers. None of that is fatal: a file's extents
are reduced to one of three shapes and bad values fall back to defaults.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ltfsindex.config import DEFAULT_PARTITION
from ltfsindex.ingestion.xml_loader import as_sequence
from ltfsindex.models import (
    ExtentDescription,
    MissingExtent,
    MultipleExtent,
    RawExtent,
    SingleExtent,
)
from ltfsindex.utils.values import coerce_count, coerce_partition

LOGGER = logging.getLogger(__name__)

# index tag -> model field
SOURCE_FIELDS = {
    "partition": "partition",
    "startblock": "start_block",
    "byteoffset": "byte_offset",
    "bytecount": "byte_count",
    "fileoffset": "file_offset",
}


def _field(extent: Any, tag: str) -> Any:
    if isinstance(extent, Mapping):
        return extent.get(tag)
    return None


def _single(extent: Any, default_partition: str) -> SingleExtent:
    values: dict[str, Any] = {}
    for tag, name in SOURCE_FIELDS.items():
        raw = _field(extent, tag)
        if name == "partition":
            value: Any = coerce_partition(raw, default="")
            fallback: Any = default_partition
            invalid = value == ""
        else:
            value = coerce_count(raw, default=-1)
            fallback = 0
            invalid = value < 0
        if invalid:
            if raw is not None:
                LOGGER.warning("Extent field %s=%r is malformed, using %r", tag, raw, fallback)
            value = fallback
        values[name] = value
    return SingleExtent(**values)


def reconcile_extents(
    extent_info: Any, *, default_partition: str = DEFAULT_PARTITION
) -> ExtentDescription:
    """Reduce a file's ``extentinfo`` node to a canonical extent description."""
    if not isinstance(extent_info, Mapping) or extent_info.get("extent") is None:
        LOGGER.debug("No extent information, using defaults")
        return MissingExtent(partition=default_partition)

    extents = as_sequence(extent_info["extent"])
    if not extents:
        return MissingExtent(partition=default_partition)
    if len(extents) > 1:
        LOGGER.warning("File declares %d extents, keeping all of them", len(extents))
        return MultipleExtent(
            extents=tuple(
                RawExtent(**{name: _field(extent, tag) for tag, name in SOURCE_FIELDS.items()})
                for extent in extents
            )
        )
    return _single(extents[0], default_partition)
