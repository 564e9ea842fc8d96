from datetime import datetime, timedelta
from pathlib import Path


class SceneCutError(Exception):
    """Base class for all SceneCut errors."""


class ArgumentError(SceneCutError):
    def __init__(self, detail: str) -> None:
        super().__init__(
            f"Invalid command line.\n"
            f"  Cause: {detail}\n"
            f"  Tip: Run `scenecut -h` for the syntax."
        )
        self.detail = detail


class DestinationMissingError(SceneCutError):
    def __init__(self, folder: Path) -> None:
        super().__init__(
            f"Destination folder does not exist: '{folder}'.\n"
            f"  Check: Create the folder first. SceneCut never creates it for you."
        )
        self.folder = folder


class SourceNotFoundError(SceneCutError):
    def __init__(self, source: Path, sidecar: Path) -> None:
        super().__init__(
            f"Scene file not found for '{source.name}'.\n"
            f"  Cause: '{sidecar}' does not exist.\n"
            f"  Check: Every video needs a sidecar named '<video name> scenes.csv' beside it."
        )
        self.source = source
        self.sidecar = sidecar


class SidecarError(SceneCutError):
    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(
            f"Cannot load scene file '{path.name}'.\n"
            f"  Cause: {detail}\n"
            f"  Check: Is it a CSV with a Position,Disposition,Date,Subject,Title header row?"
        )
        self.path = path
        self.detail = detail


class OutOfOrderDateError(SceneCutError):
    def __init__(self, previous: datetime, current: datetime) -> None:
        super().__init__(
            f"Dates aren't ascending.\n"
            f"  Cause: {previous} is followed by {current}.\n"
            f"  Tip: Use the -t option to tolerate this."
        )
        self.previous = previous
        self.current = current


class OutOfOrderPositionError(SceneCutError):
    def __init__(self, previous: timedelta, current: timedelta) -> None:
        super().__init__(
            f"Positions aren't ascending.\n"
            f"  Cause: {previous} is followed by {current}.\n"
            f"  Check: Sort the scene file by position."
        )
        self.previous = previous
        self.current = current


class MissingSubjectError(SceneCutError):
    def __init__(self, position: timedelta) -> None:
        super().__init__(
            f"Segment at {position} is missing a subject.\n"
            f"  Check: Every Keep segment needs a non-empty Subject."
        )
        self.position = position


class DegenerateSceneError(SceneCutError):
    def __init__(self, start: timedelta, end: timedelta) -> None:
        super().__init__(
            f"Scene starting at {start} would end at {end}.\n"
            f"  Cause: the next segment begins less than one frame after this one.\n"
            f"  Check: Remove or move the segment that follows {start}."
        )
        self.start = start
        self.end = end


class GenerationExhaustedError(SceneCutError):
    def __init__(self, folder: Path, base_name: str, attempts: int) -> None:
        super().__init__(
            f"Too many duplicates of '{base_name}' in '{folder}'.\n"
            f"  Cause: all {attempts} disambiguated names already exist.\n"
            f"  Check: Move earlier outputs out of the destination folder."
        )
        self.folder = folder
        self.base_name = base_name
        self.attempts = attempts


class ExternalToolError(SceneCutError):
    """An external program (ffmpeg or ffprobe) failed."""

    action = "run external tool"

    def __init__(self, target: Path, detail: str) -> None:
        super().__init__(
            f"Failed to {self.action} for '{target.name}'.\n"
            f"  Cause: {detail}\n"
            f"  Check: Is FFmpeg installed and in PATH (or set via SCENECUT_FFMPEG / SCENECUT_FFPROBE)?"
        )
        self.target = target
        self.detail = detail


class ProbeError(ExternalToolError):
    action = "read the media duration"


class TranscodeError(ExternalToolError):
    action = "cut the scene"


class MetadataWriteError(ExternalToolError):
    action = "write metadata"
