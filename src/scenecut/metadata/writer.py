"""Persist composed tag values onto a produced file with ffmpeg."""
import logging
import os
import subprocess
import tempfile
from pathlib import Path

from scenecut.config import get_ffmpeg_path
from scenecut.errors import MetadataWriteError
from scenecut.models import MetadataValues

logger = logging.getLogger(__name__)


def build_metadata_args(values: MetadataValues) -> list[str]:
    """Return the ``-metadata key=value`` pairs for *values*."""
    tags = {
        "creation_time": values.timestamp.strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        "comment": values.comment,
        "track": str(values.track_number),
    }
    if values.title:
        tags["title"] = values.title
    if values.subject:
        tags["description"] = values.subject
    args: list[str] = []
    for key, value in tags.items():
        args += ["-metadata", f"{key}={value}"]
    return args


class FfmpegMetadataWriter:
    """Rewrites a file's container tags, then its access and modification times.

    The tagged copy is written beside the original and swapped in with
    os.replace(), so *path* is either fully tagged or untouched.
    """

    def __init__(self, ffmpeg: str | None = None) -> None:
        self.ffmpeg = ffmpeg or get_ffmpeg_path()

    def write(self, path: Path, values: MetadataValues) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".scenecut-", suffix=path.suffix)
        os.close(fd)
        tmp_path = Path(tmp_name)
        cmd = [
            self.ffmpeg, "-hide_banner", "-y",
            "-i", str(path),
            "-map", "0",
            "-c", "copy",
            "-map_metadata", "0",
            *build_metadata_args(values),
            "-movflags", "+faststart",
            str(tmp_path),
        ]
        logger.debug("metadata: %s", " ".join(cmd))
        try:
            try:
                result = subprocess.run(cmd, capture_output=True, text=True, check=False)
            except FileNotFoundError as exc:
                raise MetadataWriteError(path, f"{self.ffmpeg} not found") from exc
            if result.returncode != 0:
                raise MetadataWriteError(path, result.stderr[-500:])
            os.replace(tmp_path, path)
        finally:
            tmp_path.unlink(missing_ok=True)

        stamp = values.timestamp.timestamp()
        try:
            os.utime(path, (stamp, stamp))
        except OSError as exc:
            raise MetadataWriteError(path, f"Could not set file times: {exc}") from exc
        logger.info("metadata: tagged %s (track %d)", path.name, values.track_number)
