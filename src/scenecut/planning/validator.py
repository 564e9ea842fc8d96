from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Optional

from scenecut.errors import MissingSubjectError, OutOfOrderDateError, OutOfOrderPositionError
from scenecut.models import Disposition
from scenecut.sidecar.schema import Segment


def validate_segments(segments: Sequence[Segment], tolerate_out_of_order: bool = False) -> None:
    """Check the Keep segments of a plan before any scene is produced.

    Dates must not go backwards unless *tolerate_out_of_order* is set.
    Positions must never go backwards. Every Keep segment needs a subject.
    Discard and AddToPrevious rows are not inspected.
    """
    last_date: Optional[datetime] = None
    last_position: Optional[timedelta] = None
    for segment in segments:
        if segment.disposition is not Disposition.KEEP:
            continue
        if last_date is not None and segment.date < last_date and not tolerate_out_of_order:
            raise OutOfOrderDateError(last_date, segment.date)
        if last_position is not None and segment.position < last_position:
            raise OutOfOrderPositionError(last_position, segment.position)
        if not segment.subject:
            raise MissingSubjectError(segment.position)
        last_date = segment.date
        last_position = segment.position
