"""Collision-free output filenames for produced scenes.

Names look like ``2020-01-01 (03) Party+Cake.mp4``. When that already exists
a letter goes inside the parentheses: ``(03a)``, ``(03b)`` and so on.
"""
import string
from datetime import datetime
from pathlib import Path
from typing import Callable

from scenecut.config import OUTPUT_EXTENSION
from scenecut.errors import GenerationExhaustedError
from scenecut.models import GeneratedName

TITLE_SEPARATOR = "+"

# The bare name plus "a" through "y"
MAX_ATTEMPTS = 26
_LETTERS = [""] + list(string.ascii_lowercase[:MAX_ATTEMPTS - 1])


def format_filename(date: datetime, ordinal: int, subject: str, title: str,
                    letter: str = "", extension: str = OUTPUT_EXTENSION) -> str:
    name = f"{date:%Y-%m-%d} ({ordinal:02d}{letter})"
    subject = subject.strip()
    if subject:
        name = f"{name} {subject}"
    title = title.strip()
    if title:
        name = f"{name}{TITLE_SEPARATOR}{title}"
    return name + extension


def generate_filename(
    folder: Path,
    date: datetime,
    ordinal: int,
    subject: str,
    title: str,
    extension: str = OUTPUT_EXTENSION,
    exists: Callable[[Path], bool] = Path.exists,
) -> GeneratedName:
    """Return the first candidate path in *folder* for which *exists* is false.

    Raises:
        GenerationExhaustedError: If all 26 candidates are taken.
    """
    for letter in _LETTERS:
        path = folder / format_filename(date, ordinal, subject, title, letter, extension)
        if not exists(path):
            return GeneratedName(path=path, letter=letter)
    raise GenerationExhaustedError(
        folder, format_filename(date, ordinal, subject, title, "", extension), MAX_ATTEMPTS
    )
