"""Tape header extraction."""

from __future__ import annotations

from typing import Any, Mapping

from ltfsindex.config import AppConfig
from ltfsindex.errors import IndexFormatError
from ltfsindex.models import TapeHeader
from ltfsindex.utils.values import is_true, read_name


def _scalar(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _location(document: Mapping[str, Any], field: str, *, required: bool) -> Mapping[str, Any]:
    location = document.get(field)
    if isinstance(location, Mapping):
        return location
    if required:
        raise IndexFormatError(f"Index has no {field}")
    return {}


def build_tape_header(document: Mapping[str, Any], config: AppConfig | None = None) -> TapeHeader:
    config = config or AppConfig()

    volume_uuid = _scalar(document.get("volumeuuid"))
    if not volume_uuid:
        raise IndexFormatError("Index has no volumeuuid")
    directory = document.get("directory")
    if not isinstance(directory, Mapping):
        raise IndexFormatError("Index has no root directory")

    location = _location(document, "location", required=True)
    previous = _location(document, "previousgenerationlocation", required=False)

    volume_name = read_name(directory.get("name"))
    if volume_name is None:
        volume_name = config.unnamed_volume

    return TapeHeader(
        volume_uuid=volume_uuid,
        version=_scalar(document.get("version")),
        creator=_scalar(document.get("creator")),
        generation=_scalar(document.get("generationnumber")),
        update_time=_scalar(document.get("updatetime")),
        index_partition=_scalar(location.get("partition")),
        index_start_block=_scalar(location.get("startblock")),
        previous_generation_partition=_scalar(previous.get("partition")),
        previous_generation_start_block=_scalar(previous.get("startblock")),
        allow_policy_update=is_true(document.get("allowpolicyupdate")),
        highest_file_uid=_scalar(document.get("highestfileuid")),
        volume_name=volume_name,
    )
