"""Turn a validated segment list into scenes."""
from collections.abc import Sequence
from datetime import timedelta

from scenecut.config import FRAME_TRIM
from scenecut.errors import DegenerateSceneError
from scenecut.models import Disposition, Scene
from scenecut.sidecar.schema import Segment


def resolve_scene_end(
    segments: Sequence[Segment],
    index: int,
    media_duration: timedelta,
    trim: timedelta = FRAME_TRIM,
) -> timedelta:
    """Return where the scene opened by ``segments[index]`` ends.

    AddToPrevious rows after *index* are absorbed into the scene. The first
    Keep or Discard row closes it, *trim* before its position. If the list
    runs out first the scene lasts until *media_duration*.
    """
    for segment in segments[index + 1:]:
        if segment.disposition is Disposition.ADD_TO_PREVIOUS:
            continue
        elif segment.disposition in (Disposition.KEEP, Disposition.DISCARD):
            return segment.position - trim
        else:
            raise ValueError(f"Unhandled disposition: {segment.disposition!r}")
    return media_duration


def plan_scenes(
    segments: Sequence[Segment],
    media_duration: timedelta,
    trim: timedelta = FRAME_TRIM,
) -> list[Scene]:
    """Build one Scene per Keep segment, in list order.

    Ordinals are left at 0; see :func:`scenecut.planning.ordinal.assign_ordinals`.

    Raises:
        DegenerateSceneError: If a scene's end is not after its start.
    """
    scenes: list[Scene] = []
    for i, segment in enumerate(segments):
        if segment.disposition is not Disposition.KEEP:
            continue
        end = resolve_scene_end(segments, i, media_duration, trim)
        if end <= segment.position:
            raise DegenerateSceneError(segment.position, end)
        scenes.append(Scene(
            start=segment.position,
            end=end,
            date=segment.date,
            subject=segment.subject,
            title=segment.title,
        ))
    return scenes
