"""Flat file catalogs from LTFS index documents."""

from ltfsindex.errors import IndexFormatError
from ltfsindex.index.ltfs_index import LTFSIndex

__all__ = ["IndexFormatError", "LTFSIndex"]
