import csv
from pathlib import Path

from pydantic import ValidationError

from scenecut.config import SIDECAR_SUFFIX
from scenecut.errors import SidecarError, SourceNotFoundError
from scenecut.sidecar.schema import Segment

_COLUMNS = ("position", "disposition", "date", "subject", "title")


def sidecar_path_for(source: Path) -> Path:
    """Return the scene file that accompanies *source*: ``clip.mp4`` -> ``clip scenes.csv``."""
    return source.with_name(source.stem + SIDECAR_SUFFIX)


def load_segments(path: Path) -> list[Segment]:
    """Load and validate a scene CSV. Raises SidecarError on failure."""
    try:
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None:
                raise SidecarError(path, "File is empty")
            header = {name: (name or "").strip().lower() for name in reader.fieldnames}
            for required in ("position", "disposition"):
                if required not in header.values():
                    raise SidecarError(path, f"Missing '{required}' column in header row")

            segments: list[Segment] = []
            for row in reader:
                values = {
                    header[k]: v for k, v in row.items()
                    if k is not None and header[k] in _COLUMNS
                }
                if not any((v or "").strip() for v in values.values()):
                    continue
                segments.append(_parse_row(path, reader.line_num, values))
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise SidecarError(path, str(e)) from e
    return segments


def load_segments_for(source: Path) -> list[Segment]:
    """Locate and load the scene file for *source*. Raises SourceNotFoundError if absent."""
    sidecar = sidecar_path_for(source)
    if not sidecar.is_file():
        raise SourceNotFoundError(source, sidecar)
    return load_segments(sidecar)


def _parse_row(path: Path, line: int, values: dict[str, str]) -> Segment:
    try:
        return Segment.model_validate(values)
    except ValidationError as e:
        field_errors = "; ".join(
            f"{' -> '.join(str(x) for x in err['loc']) or 'row'}: {err['msg']}"
            for err in e.errors()
        )
        raise SidecarError(path, f"Line {line}: {field_errors}") from e
