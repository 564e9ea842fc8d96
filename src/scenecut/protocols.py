"""Capability interfaces the pipeline is given, so planning runs without ffmpeg."""
from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Protocol

from scenecut.models import MetadataValues


class Transcoder(Protocol):
    def transcode(self, source: Path, start: timedelta, end: timedelta, destination: Path) -> None:
        """Write ``[start, end)`` of *source* to *destination*, blocking until done."""


class MetadataWriter(Protocol):
    def write(self, path: Path, values: MetadataValues) -> None:
        """Persist *values* onto *path*, all or nothing."""


class DurationProbe(Protocol):
    def __call__(self, source: Path) -> timedelta:
        """Return the total media duration of *source*."""
