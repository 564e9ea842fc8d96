"""Segment validation, scene planning and per-day numbering."""
from scenecut.planning.ordinal import assign_ordinals
from scenecut.planning.planner import plan_scenes, resolve_scene_end
from scenecut.planning.validator import validate_segments

__all__ = ["assign_ordinals", "plan_scenes", "resolve_scene_end", "validate_segments"]
