"""Scene file (``<video> scenes.csv``) schema and loading."""
from scenecut.sidecar.loader import load_segments, load_segments_for, sidecar_path_for
from scenecut.sidecar.schema import Segment

__all__ = ["Segment", "load_segments", "load_segments_for", "sidecar_path_for"]
