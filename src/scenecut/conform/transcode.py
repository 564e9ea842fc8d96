"""FFmpeg scene extraction and ffprobe duration lookup.

Cuts are decoded and re-encoded (``-ss``/``-to`` after ``-i``) so they land on
the exact frame rather than the preceding keyframe. The encode blocks until
ffmpeg exits; there is no timeout.
"""

from __future__ import annotations

import json
import logging
import subprocess
from datetime import timedelta
from pathlib import Path

from better_ffmpeg_progress import FfmpegProcess
from better_ffmpeg_progress.exceptions import FfmpegProcessError

from scenecut.config import get_ffmpeg_path, get_ffprobe_path
from scenecut.errors import ProbeError, TranscodeError

logger = logging.getLogger(__name__)

_H264_OPTIONS = [
    "-c:v", "libx264",
    "-profile:v", "main",
    "-level:v", "3.1",
    "-crf", "20",
    "-c:a", "aac",
    "-movflags", "+faststart",
]

# Interlaced captures (DV/AVI) are deinterlaced at field rate and moved to 4:2:0
_ENCODE_OPTIONS: dict[str, list[str]] = {
    ".avi": ["-vf", "yadif=1,unsharp", "-pix_fmt", "yuv420p", *_H264_OPTIONS],
}
_DEFAULT_ENCODE_OPTIONS = ["-vf", "unsharp", *_H264_OPTIONS]


def format_offset(offset: timedelta) -> str:
    """Render *offset* in ffmpeg's microsecond duration syntax, e.g. ``65000000us``."""
    return f"{offset // timedelta(microseconds=1)}us"


def encode_options_for(source: Path) -> list[str]:
    """Return the encoder arguments to use for *source*'s container type."""
    return list(_ENCODE_OPTIONS.get(source.suffix.lower(), _DEFAULT_ENCODE_OPTIONS))


def build_transcode_command(
    ffmpeg: str,
    source: Path,
    start: timedelta,
    end: timedelta,
    destination: Path,
) -> list[str]:
    return [
        ffmpeg, "-hide_banner",
        "-i", str(source),
        "-ss", format_offset(start),
        "-to", format_offset(end),
        *encode_options_for(source),
        str(destination),
    ]


class FfmpegTranscoder:
    """Cuts ``[start, end)`` of a source into a new H.264/AAC MP4."""

    def __init__(self, ffmpeg: str | None = None) -> None:
        self.ffmpeg = ffmpeg or get_ffmpeg_path()

    def transcode(self, source: Path, start: timedelta, end: timedelta, destination: Path) -> None:
        """Produce *destination* from *source*.

        Raises
        ------
        TranscodeError
            If ffmpeg fails or exits without writing the output.
        """
        cmd = build_transcode_command(self.ffmpeg, source, start, end, destination)
        logger.debug("transcode: %s", " ".join(cmd))

        try:
            process = FfmpegProcess(cmd)
            return_code = process.run()
        except FfmpegProcessError as exc:
            raise TranscodeError(destination, str(exc)) from exc
        except FileNotFoundError as exc:
            raise TranscodeError(destination, f"{self.ffmpeg} not found") from exc

        if isinstance(return_code, int) and return_code != 0:
            raise TranscodeError(destination, f"ffmpeg exited with status {return_code}")
        if not destination.exists() or destination.stat().st_size == 0:
            raise TranscodeError(destination, "ffmpeg finished but produced no output")
        logger.info("transcode: wrote %s", destination.name)


def probe_media_duration(source: Path, ffprobe: str | None = None) -> timedelta:
    """Return the container duration of *source*.

    Raises
    ------
    ProbeError
        If ffprobe is missing, fails, or reports no duration.
    """
    cmd = [
        ffprobe or get_ffprobe_path(),
        "-v", "quiet",
        "-print_format", "json",
        "-show_format",
        str(source),
    ]
    try:
        result = subprocess.run(cmd, check=True, capture_output=True, text=True)
    except subprocess.CalledProcessError as exc:
        raise ProbeError(source, f"ffprobe failed: {(exc.stderr or '').strip()}") from exc
    except FileNotFoundError as exc:
        raise ProbeError(source, "ffprobe not found") from exc

    try:
        data = json.loads(result.stdout)
        seconds = float(data["format"]["duration"])
    except (KeyError, TypeError, ValueError, json.JSONDecodeError) as exc:
        raise ProbeError(source, f"Could not parse ffprobe output: {exc}") from exc
    if seconds <= 0:
        raise ProbeError(source, "Media duration is zero")
    return timedelta(seconds=seconds)
