"""Build file records from raw ``file`` nodes."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ltfsindex.config import DEFAULT_PARTITION
from ltfsindex.errors import IndexFormatError
from ltfsindex.index.extents import reconcile_extents
from ltfsindex.models import FileRecord
from ltfsindex.utils.values import is_false, is_true, parse_timestamp, read_name

TIMESTAMP_FIELDS = {
    "created_at": "creationtime",
    "changed_at": "changetime",
    "modified_at": "modifytime",
    "accessed_at": "accesstime",
    "backed_up_at": "backuptime",
}


def _parse_length(raw: Any, name: str) -> int:
    if raw is None or raw == {}:
        return 0
    try:
        length = int(str(raw).strip())
    except ValueError as exc:
        raise IndexFormatError(f"Malformed length {raw!r} for file {name!r}") from exc
    if length < 0:
        raise IndexFormatError(f"Negative length {raw!r} for file {name!r}")
    return length


def _read_only(raw_file: Mapping[str, Any]) -> bool:
    # older writers only record the inverse flag
    if "readonly" not in raw_file and "editable" in raw_file:
        return is_false(raw_file["editable"])
    return is_true(raw_file.get("readonly"))


def _unique_id(raw: Any) -> str | None:
    if raw is None or isinstance(raw, (dict, list)):
        return None
    return str(raw)


def build_file_record(
    raw_file: Mapping[str, Any],
    path: Sequence[str],
    volume_id: str,
    *,
    default_partition: str = DEFAULT_PARTITION,
) -> FileRecord:
    """Turn one ``file`` node into a :class:`FileRecord`.

    ``path`` holds the directory names from the root down to the file's
    parent. Timestamps must be present and well-formed; extent problems are
    tolerated.
    """
    if not isinstance(raw_file, Mapping):
        raise IndexFormatError(f"Expected a file entry, got {raw_file!r}")
    name = read_name(raw_file.get("name"))
    if name is None:
        raise IndexFormatError(f"File entry without a name under {'/'.join(path)!r}")

    timestamps = {}
    for attribute, tag in TIMESTAMP_FIELDS.items():
        try:
            timestamps[attribute] = parse_timestamp(raw_file.get(tag), field=tag)
        except IndexFormatError as exc:
            raise IndexFormatError(f"{exc} (file {name!r})") from exc

    return FileRecord(
        path=tuple(path),
        name=name,
        size=_parse_length(raw_file.get("length"), name),
        is_read_only=_read_only(raw_file),
        unique_id=_unique_id(raw_file.get("fileuid")),
        volume_id=volume_id,
        extent=reconcile_extents(raw_file.get("extentinfo"), default_partition=default_partition),
        **timestamps,
    )
