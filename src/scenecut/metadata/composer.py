"""Derive the tag values written onto each produced scene."""
from datetime import datetime, time, timedelta, timezone

from scenecut.models import MetadataValues

TITLE_SEPARATOR = "+"
TIMEZONE_MARKER = "&timezone=0"
DATE_PRECISION_MARKER = "&datePrecision=8"

# Synthesized times for date-only scenes start here
_SYNTHETIC_BASE_HOUR = 12


def is_date_only(date: datetime) -> bool:
    """True when *date* carries no time of day (midnight to the second)."""
    return date.hour == 0 and date.minute == 0 and date.second == 0


def compose_title(subject: str, title: str) -> str:
    subject = subject.strip()
    title = title.strip()
    if subject and title:
        return f"{subject}{TITLE_SEPARATOR}{title}"
    return subject or title


def compose_comment(date: datetime) -> str:
    if is_date_only(date):
        return f"{TIMEZONE_MARKER} {DATE_PRECISION_MARKER}"
    return TIMEZONE_MARKER


def synthesize_timestamp(date: datetime, ordinal: int) -> datetime:
    """Return the creation timestamp for a scene, as UTC.

    Date-only scenes get noon plus *ordinal* seconds, so same-day clips sort
    by ordinal. Once *ordinal* reaches 43200 the result crosses midnight into
    the following day, and it keeps wrapping beyond 86400. Real plans never
    get close, so this is left as is.
    """
    if is_date_only(date):
        hours = _SYNTHETIC_BASE_HOUR + ordinal // (60 * 60)
        minutes = (ordinal // 60) % 60
        seconds = ordinal % 60
        midnight = datetime.combine(date.date(), time())
        date = midnight + timedelta(hours=hours, minutes=minutes, seconds=seconds)
    return date.replace(tzinfo=timezone.utc)


def compose_metadata(date: datetime, ordinal: int, subject: str, title: str) -> MetadataValues:
    """Build the full set of tag values for one scene. No I/O."""
    if ordinal < 0:
        raise ValueError(f"Track number must be unsigned, got {ordinal}")
    subject = subject.strip()
    return MetadataValues(
        title=compose_title(subject, title),
        subject=subject or None,
        comment=compose_comment(date),
        timestamp=synthesize_timestamp(date, ordinal),
        track_number=ordinal,
    )
