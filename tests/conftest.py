from datetime import timedelta

import pytest

from scenecut.sidecar.schema import Segment


def seg(position: float, disposition: str = "Keep", date: str | None = None,
        subject: str = "", title: str = "") -> Segment:
    """Build a Segment from seconds and plain strings."""
    return Segment(
        position=timedelta(seconds=position),
        disposition=disposition,
        date=date,
        subject=subject,
        title=title,
    )


@pytest.fixture
def party_segments() -> list[Segment]:
    """Keep 0:00 Party, Discard 1:00, Keep 1:05 Cake, all on 2020-01-01."""
    return [
        seg(0, "Keep", "2020-01-01", "Party"),
        seg(60, "Discard"),
        seg(65, "Keep", "2020-01-01", "Cake"),
    ]
