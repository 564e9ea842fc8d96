import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from scenecut.models import Disposition

# Keys are lowercased with spaces, hyphens and underscores removed
_DISPOSITION_KEYWORDS: dict[str, Disposition] = {
    "keep": Disposition.KEEP,
    "discard": Disposition.DISCARD,
    "addtoprevious": Disposition.ADD_TO_PREVIOUS,
    "add": Disposition.ADD_TO_PREVIOUS,
    "+": Disposition.ADD_TO_PREVIOUS,
}


def parse_position(text: str) -> timedelta:
    """Parse ``h:mm:ss.fff``, ``mm:ss.fff`` or plain seconds into a timedelta."""
    stripped = text.strip()
    if stripped.startswith("-"):
        raise ValueError(f"Position '{text}' is negative")
    parts = stripped.split(":")
    if not parts[-1] or len(parts) > 3:
        raise ValueError(f"Unrecognised position '{text}'. Expected h:mm:ss.fff")
    seconds = float(parts[-1])
    minutes = int(parts[-2]) if len(parts) >= 2 else 0
    hours = int(parts[-3]) if len(parts) == 3 else 0
    if seconds < 0 or minutes < 0 or hours < 0:
        raise ValueError(f"Position '{text}' is negative")
    try:
        return timedelta(hours=hours, minutes=minutes, seconds=seconds)
    except OverflowError:
        raise ValueError(f"Position '{text}' is out of range") from None


class Segment(BaseModel):
    """One row of the operator's scene plan."""
    position: timedelta
    disposition: Disposition
    date: Optional[datetime] = None
    subject: str = ""
    title: str = ""

    @field_validator("position", mode="before")
    @classmethod
    def parse_position_text(cls, v):
        if isinstance(v, str):
            return parse_position(v)
        return v

    @field_validator("disposition", mode="before")
    @classmethod
    def parse_disposition_keyword(cls, v):
        if isinstance(v, Disposition):
            return v
        key = re.sub(r"[\s_\-]", "", str(v)).lower()
        if key not in _DISPOSITION_KEYWORDS:
            raise ValueError(
                f"Unknown disposition '{v}'. Expected Keep, Discard or AddToPrevious"
            )
        return _DISPOSITION_KEYWORDS[key]

    @field_validator("date", mode="before")
    @classmethod
    def parse_date_text(cls, v):
        if v is None:
            return None
        if isinstance(v, str):
            if not v.strip():
                return None
            v = datetime.fromisoformat(v.strip())
        elif isinstance(v, date) and not isinstance(v, datetime):
            v = datetime(v.year, v.month, v.day)
        # Aware timestamps are folded to naive UTC so every date in a plan compares
        if isinstance(v, datetime) and v.tzinfo is not None:
            v = v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @field_validator("subject", "title", mode="before")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return ""
        return str(v).strip()

    @model_validator(mode="after")
    def keep_has_date(self) -> "Segment":
        if self.disposition is Disposition.KEEP and self.date is None:
            raise ValueError(f"Keep segment at {self.position} has no date")
        return self
