"""Core LTFS catalog data models."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Dict, Tuple, Union

from ltfsindex.config import DEFAULT_PARTITION, DISPLAY_DELIMITER

EXTENT_FIELDS = ("partition", "start_block", "byte_offset", "byte_count", "file_offset")


@dataclass(frozen=True, slots=True)
class MissingExtent:
    """The file carries no extent information at all."""

    kind: ClassVar[str] = "missing"

    partition: str = DEFAULT_PARTITION
    start_block: int = 0
    byte_offset: int = 0
    byte_count: int = 0
    file_offset: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **{name: getattr(self, name) for name in EXTENT_FIELDS}}


@dataclass(frozen=True, slots=True)
class SingleExtent:
    """Exactly one physical extent, with every field coerced."""

    kind: ClassVar[str] = "single"

    partition: str
    start_block: int
    byte_offset: int
    byte_count: int
    file_offset: int

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, **{name: getattr(self, name) for name in EXTENT_FIELDS}}


@dataclass(frozen=True, slots=True)
class RawExtent:
    """One extent of a multi-extent file, values kept as they appeared in the index."""

    partition: Any = None
    start_block: Any = None
    byte_offset: Any = None
    byte_count: Any = None
    file_offset: Any = None


@dataclass(frozen=True, slots=True)
class MultipleExtent:
    """Several extents declared for the same file.

    The extents are kept as one record per extent, so the values of a single
    extent always stay together. The per-field sequences and the
    delimiter-joined strings are derived views for display; the joined form
    cannot be split back reliably and should not be parsed.
    """

    kind: ClassVar[str] = "multiple"

    extents: Tuple[RawExtent, ...]

    def values(self, field: str) -> Tuple[Any, ...]:
        """Return the raw values of one extent field, in extent order."""
        if field not in EXTENT_FIELDS:
            raise KeyError(field)
        return tuple(getattr(extent, field) for extent in self.extents)

    @property
    def partitions(self) -> Tuple[Any, ...]:
        return self.values("partition")

    @property
    def start_blocks(self) -> Tuple[Any, ...]:
        return self.values("start_block")

    @property
    def byte_offsets(self) -> Tuple[Any, ...]:
        return self.values("byte_offset")

    @property
    def byte_counts(self) -> Tuple[Any, ...]:
        return self.values("byte_count")

    @property
    def file_offsets(self) -> Tuple[Any, ...]:
        return self.values("file_offset")

    def joined(self, field: str, delimiter: str = DISPLAY_DELIMITER) -> str:
        """Join one field's values the way older catalog exports displayed them."""
        return delimiter.join("" if value is None else str(value) for value in self.values(field))

    def to_dict(self, delimiter: str = DISPLAY_DELIMITER) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "extents": [
                {name: getattr(extent, name) for name in EXTENT_FIELDS} for extent in self.extents
            ],
            "display": {name: self.joined(name, delimiter) for name in EXTENT_FIELDS},
        }


ExtentDescription = Union[MissingExtent, SingleExtent, MultipleExtent]


@dataclass(frozen=True, slots=True)
class FileRecord:
    """One file on the tape, with the directory path leading to it."""

    path: Tuple[str, ...]
    name: str
    size: int
    is_read_only: bool
    created_at: datetime
    changed_at: datetime
    modified_at: datetime
    accessed_at: datetime
    backed_up_at: datetime
    unique_id: str | None
    volume_id: str
    extent: ExtentDescription

    @property
    def length(self) -> int:
        return self.size

    @property
    def uid(self) -> str | None:
        return self.unique_id

    @property
    def filepath(self) -> str:
        """Containing directory as a single path string."""
        return posixpath.join(*self.path)

    @property
    def full_path(self) -> str:
        return posixpath.join(self.filepath, self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": list(self.path),
            "filepath": self.filepath,
            "name": self.name,
            "size": self.size,
            "is_read_only": self.is_read_only,
            "created_at": self.created_at.isoformat(),
            "changed_at": self.changed_at.isoformat(),
            "modified_at": self.modified_at.isoformat(),
            "accessed_at": self.accessed_at.isoformat(),
            "backed_up_at": self.backed_up_at.isoformat(),
            "unique_id": self.unique_id,
            "volume_id": self.volume_id,
            "extent": self.extent.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class TapeHeader:
    """Volume-level fields of an LTFS index."""

    volume_uuid: str
    version: str | None
    creator: str | None
    generation: str | None
    update_time: str | None
    index_partition: str | None
    index_start_block: str | None
    previous_generation_partition: str | None
    previous_generation_start_block: str | None
    allow_policy_update: bool
    highest_file_uid: str | None
    volume_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "volume_uuid": self.volume_uuid,
            "version": self.version,
            "creator": self.creator,
            "generation": self.generation,
            "update_time": self.update_time,
            "index_partition": self.index_partition,
            "index_start_block": self.index_start_block,
            "previous_generation_partition": self.previous_generation_partition,
            "previous_generation_start_block": self.previous_generation_start_block,
            "allow_policy_update": self.allow_policy_update,
            "highest_file_uid": self.highest_file_uid,
            "volume_name": self.volume_name,
        }
