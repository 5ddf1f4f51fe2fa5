"""Exceptions raised while reading LTFS index documents."""

from __future__ import annotations


class IndexFormatError(ValueError):
    """The index document does not follow the LTFS index format."""
