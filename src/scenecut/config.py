"""Run configuration and tool lookup."""
import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

# One NTSC frame, subtracted from a scene's end so it never shows the next segment's first frame
FRAME_TRIM = timedelta(milliseconds=34)

SIDECAR_SUFFIX = " scenes.csv"
OUTPUT_EXTENSION = ".mp4"


def get_ffmpeg_path() -> str:
    """Return the ffmpeg executable, honouring SCENECUT_FFMPEG."""
    return os.environ.get("SCENECUT_FFMPEG") or "ffmpeg"


def get_ffprobe_path() -> str:
    """Return the ffprobe executable, honouring SCENECUT_FFPROBE."""
    return os.environ.get("SCENECUT_FFPROBE") or "ffprobe"


@dataclass(frozen=True)
class RunConfig:
    """Options for one invocation. Built once by the CLI and passed down."""
    destination: Path
    tolerate_out_of_order: bool = False
    trim: timedelta = FRAME_TRIM
    output_extension: str = OUTPUT_EXTENSION
