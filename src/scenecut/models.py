from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Optional


class Disposition(str, Enum):
    """What to do with the span that starts at a segment's position."""
    KEEP = "Keep"
    DISCARD = "Discard"
    ADD_TO_PREVIOUS = "AddToPrevious"


@dataclass(frozen=True)
class Scene:
    """A contiguous span of the source destined to become one output file."""

    start: timedelta
    end: timedelta
    date: datetime
    subject: str
    title: str = ""
    ordinal: int = 0    # 1-based once assigned; 0 means "not yet assigned"


@dataclass(frozen=True)
class GeneratedName:
    """Destination path plus the disambiguation letter used to make it unique."""

    path: Path
    letter: str = ""


@dataclass(frozen=True)
class MetadataValues:
    """Tag values handed to a metadata writer for one produced scene."""

    title: str
    subject: Optional[str]
    comment: str
    timestamp: datetime  # UTC-aware
    track_number: int


@dataclass(frozen=True)
class ProducedScene:
    scene: Scene
    path: Path
