"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass

ROOT_SEGMENT = "/"
DEFAULT_PARTITION = "b"
UNNAMED_VOLUME = "Unnamed Tape"
DISPLAY_DELIMITER = ","


@dataclass(slots=True)
class AppConfig:
    root_segment: str = ROOT_SEGMENT
    default_partition: str = DEFAULT_PARTITION
    unnamed_volume: str = UNNAMED_VOLUME
    display_delimiter: str = DISPLAY_DELIMITER

    def __post_init__(self) -> None:
        if not self.root_segment:
            raise ValueError("root_segment must not be empty")
        if not self.display_delimiter:
            raise ValueError("display_delimiter must not be empty")
