"""FFmpeg-backed scene extraction."""
from scenecut.conform.transcode import FfmpegTranscoder, probe_media_duration

__all__ = ["FfmpegTranscoder", "probe_media_duration"]
