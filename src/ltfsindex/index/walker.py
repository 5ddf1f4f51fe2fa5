"""Directory tree traversal."""

from __future__ import annotations

import logging
import posixpath
from typing import Any, Iterator, Mapping, Tuple

from ltfsindex.config import ROOT_SEGMENT
from ltfsindex.errors import IndexFormatError
from ltfsindex.ingestion.xml_loader import as_sequence
from ltfsindex.utils.values import read_name

LOGGER = logging.getLogger(__name__)

PathSegments = Tuple[str, ...]


class DirectoryWalker:
    """Pre-order, depth-first walk over a ``contents`` node.

    The path is passed down as an immutable tuple, so a walk that fails part
    way leaves nothing behind and walkers can be reused freely.
    """

    def __init__(self, root_segment: str = ROOT_SEGMENT) -> None:
        self.root_segment = root_segment

    def walk(self, root: Any) -> Iterator[Tuple[PathSegments, Mapping[str, Any]]]:
        """Yield ``(path, raw_file)`` for every file below ``root``, in document order."""
        yield from self._walk(root, (self.root_segment,))

    def _walk(
        self, contents: Any, path: PathSegments
    ) -> Iterator[Tuple[PathSegments, Mapping[str, Any]]]:
        if contents == "" or contents == {}:
            return
        if not isinstance(contents, Mapping):
            raise IndexFormatError(f"Malformed contents under {posixpath.join(*path)!r}")

        if "file" in contents:
            for raw_file in as_sequence(contents["file"]):
                yield path, raw_file

        if "directory" in contents:
            for directory in as_sequence(contents["directory"]):
                name, sub_contents = self._directory_entry(directory, path)
                LOGGER.debug("Entering directory %s", posixpath.join(*path, name))
                yield from self._walk(sub_contents, path + (name,))

    @staticmethod
    def _directory_entry(directory: Any, path: PathSegments) -> Tuple[str, Any]:
        if not isinstance(directory, Mapping):
            raise IndexFormatError(f"Malformed directory entry under {posixpath.join(*path)!r}")
        name = read_name(directory.get("name"))
        if name is None:
            raise IndexFormatError(f"Directory without a name under {posixpath.join(*path)!r}")
        if "contents" not in directory:
            raise IndexFormatError(f"Directory {name!r} has no contents")
        return name, directory["contents"]
