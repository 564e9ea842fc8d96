from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime
from typing import Optional

from scenecut.models import Scene


def assign_ordinals(scenes: Iterable[Scene]) -> list[Scene]:
    """Number scenes 1, 2, 3... within each capture date, in ascending start order.

    The counter restarts whenever a scene's date differs from the previous
    scene's date (``!=``, not ``>``). With out-of-order dates tolerated, a
    return to an earlier date therefore restarts at 1 rather than continuing.
    """
    last_date: Optional[datetime] = None
    ordinal = 0
    numbered: list[Scene] = []
    for scene in sorted(scenes, key=lambda s: s.start):
        if scene.date != last_date:
            ordinal = 0
        ordinal += 1
        last_date = scene.date
        numbered.append(replace(scene, ordinal=ordinal))
    return numbered
