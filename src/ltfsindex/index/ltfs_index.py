"""LTFS index facade."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping, Tuple

from ltfsindex.config import AppConfig
from ltfsindex.errors import IndexFormatError
from ltfsindex.index.header import build_tape_header
from ltfsindex.index.records import build_file_record
from ltfsindex.index.walker import DirectoryWalker
from ltfsindex.ingestion.xml_loader import IndexSource, load_index_document
from ltfsindex.models import FileRecord, TapeHeader

LOGGER = logging.getLogger(__name__)


class LTFSIndex:
    """One LTFS index: the tape header plus a flat catalog of its files.

    The header is read on construction. Walking the directory tree can be
    expensive for large tapes, so the file catalog is built the first time
    :meth:`files` is called and reused afterwards.
    """

    def __init__(
        self,
        source: IndexSource | None = None,
        config: AppConfig | None = None,
        *,
        document: Mapping[str, Any] | None = None,
    ) -> None:
        if (source is None) == (document is None):
            raise TypeError("LTFSIndex needs exactly one of source or document")
        if document is None:
            document = load_index_document(source)

        self.config = config or AppConfig()
        self._header = build_tape_header(document, self.config)
        directory = document["directory"]
        if "contents" not in directory:
            raise IndexFormatError("Root directory has no contents")
        self._contents = directory["contents"]
        self._walker = DirectoryWalker(self.config.root_segment)
        self._files: Tuple[FileRecord, ...] | None = None

    @classmethod
    def from_document(
        cls, document: Mapping[str, Any], config: AppConfig | None = None
    ) -> "LTFSIndex":
        """Build an index from an already parsed document."""
        return cls(config=config, document=document)

    @property
    def header(self) -> TapeHeader:
        return self._header

    @property
    def volume_id(self) -> str:
        return self._header.volume_uuid

    def files(self) -> Tuple[FileRecord, ...]:
        """Return every file on the tape, in document order."""
        if self._files is None:
            records = tuple(
                build_file_record(
                    raw_file,
                    path,
                    self.volume_id,
                    default_partition=self.config.default_partition,
                )
                for path, raw_file in self._walker.walk(self._contents)
            )
            LOGGER.info("Catalogued %d files on volume %s", len(records), self.volume_id)
            self._files = records
        return self._files

    def __len__(self) -> int:
        return len(self.files())

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self.files())
