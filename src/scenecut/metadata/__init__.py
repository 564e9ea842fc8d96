"""Tag composition and writing for produced scenes."""
from scenecut.metadata.composer import compose_metadata
from scenecut.metadata.writer import FfmpegMetadataWriter

__all__ = ["FfmpegMetadataWriter", "compose_metadata"]
