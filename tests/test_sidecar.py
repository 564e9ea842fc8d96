from datetime import datetime, timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from scenecut.errors import SidecarError, SourceNotFoundError
from scenecut.models import Disposition
from scenecut.sidecar.loader import load_segments, load_segments_for, sidecar_path_for
from scenecut.sidecar.schema import Segment, parse_position

FIXTURE = Path(__file__).parent / "fixtures" / "holiday scenes.csv"


class TestParsePosition:
    @pytest.mark.parametrize("text,expected", [
        ("0:01:05.250", timedelta(minutes=1, seconds=5.25)),
        ("1:00:00", timedelta(hours=1)),
        ("02:30", timedelta(minutes=2, seconds=30)),
        ("12.5", timedelta(seconds=12.5)),
    ])
    def test_accepted_forms(self, text, expected):
        assert parse_position(text) == expected

    @pytest.mark.parametrize("text", ["", "1:2:3:4", "abc", "1:", "1e20", "inf", "-0:05", " -5"])
    def test_rejected_forms(self, text):
        with pytest.raises(ValueError):
            parse_position(text)

    def test_negative_minute_zero_not_accepted_as_positive(self):
        with pytest.raises(ValueError, match="negative"):
            parse_position("-0:05")

    def test_huge_position_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            parse_position("1e20")


class TestSegmentSchema:
    @pytest.mark.parametrize("keyword,expected", [
        ("Keep", Disposition.KEEP),
        ("discard", Disposition.DISCARD),
        ("AddToPrevious", Disposition.ADD_TO_PREVIOUS),
        ("add to previous", Disposition.ADD_TO_PREVIOUS),
        ("add_to_previous", Disposition.ADD_TO_PREVIOUS),
        ("+", Disposition.ADD_TO_PREVIOUS),
    ])
    def test_disposition_keywords(self, keyword, expected):
        s = Segment.model_validate({"position": "0:00", "disposition": keyword, "date": "2020-01-01"})
        assert s.disposition is expected

    def test_unknown_disposition_rejected(self):
        with pytest.raises(ValidationError):
            Segment.model_validate({"position": "0:00", "disposition": "maybe"})

    def test_date_only_parses_to_midnight(self):
        s = Segment.model_validate({"position": "0", "disposition": "Keep", "date": "2020-01-01"})
        assert s.date == datetime(2020, 1, 1)

    def test_date_with_time(self):
        s = Segment.model_validate({"position": "0", "disposition": "Keep", "date": "2020-01-01 09:30"})
        assert s.date == datetime(2020, 1, 1, 9, 30)

    def test_blank_date_allowed_on_discard(self):
        s = Segment.model_validate({"position": "0", "disposition": "Discard", "date": "  "})
        assert s.date is None

    def test_keep_requires_date(self):
        with pytest.raises(ValidationError):
            Segment.model_validate({"position": "0", "disposition": "Keep", "subject": "Party"})

    def test_subject_and_title_stripped(self):
        s = Segment.model_validate({
            "position": "0", "disposition": "Keep", "date": "2020-01-01",
            "subject": "  Party ", "title": None,
        })
        assert s.subject == "Party"
        assert s.title == ""


class TestSidecarPath:
    def test_replaces_extension_with_suffix(self):
        assert sidecar_path_for(Path("/v/holiday.mp4")) == Path("/v/holiday scenes.csv")

    def test_avi(self):
        assert sidecar_path_for(Path("/v/tape 3.AVI")) == Path("/v/tape 3 scenes.csv")


class TestLoadSegments:
    def test_load_fixture(self):
        segments = load_segments(FIXTURE)
        assert [s.disposition for s in segments] == [
            Disposition.KEEP, Disposition.DISCARD, Disposition.KEEP,
            Disposition.ADD_TO_PREVIOUS, Disposition.KEEP,
        ]
        assert segments[2].subject == "Cake"
        assert segments[2].title == "Candles"
        assert segments[3].position == timedelta(minutes=1, seconds=30.5)

    def test_header_case_insensitive_and_blank_lines_skipped(self, tmp_path):
        p = tmp_path / "a scenes.csv"
        p.write_text(
            "POSITION, disposition ,DATE,subject\n"
            "0:00,Keep,2020-05-05,Garden\n"
            ",,,\n"
            "0:30,Discard,,\n",
            encoding="utf-8",
        )
        segments = load_segments(p)
        assert len(segments) == 2
        assert segments[0].subject == "Garden"
        assert segments[0].title == ""

    def test_utf8_bom_tolerated(self, tmp_path):
        p = tmp_path / "a scenes.csv"
        p.write_text("\ufeffPosition,Disposition,Date,Subject\n0,Keep,2020-01-01,Zoë\n", encoding="utf-8")
        assert load_segments(p)[0].subject == "Zoë"

    def test_missing_column_raises(self, tmp_path):
        p = tmp_path / "a scenes.csv"
        p.write_text("Position,Date\n0,2020-01-01\n", encoding="utf-8")
        with pytest.raises(SidecarError, match="disposition"):
            load_segments(p)

    def test_bad_row_reports_line(self, tmp_path):
        p = tmp_path / "a scenes.csv"
        p.write_text("Position,Disposition,Date,Subject\n0,Keep,2020-01-01,A\nxx,Keep,2020-01-01,B\n",
                     encoding="utf-8")
        with pytest.raises(SidecarError, match="Line 3"):
            load_segments(p)

    def test_out_of_range_position_reports_line(self, tmp_path):
        p = tmp_path / "a scenes.csv"
        p.write_text("Position,Disposition,Date,Subject\n1e20,Keep,2020-01-01,A\n", encoding="utf-8")
        with pytest.raises(SidecarError, match="Line 2"):
            load_segments(p)

    def test_empty_file_raises(self, tmp_path):
        p = tmp_path / "a scenes.csv"
        p.write_text("", encoding="utf-8")
        with pytest.raises(SidecarError):
            load_segments(p)

    def test_missing_sidecar_raises_source_not_found(self, tmp_path):
        video = tmp_path / "holiday.mp4"
        video.touch()
        with pytest.raises(SourceNotFoundError) as exc_info:
            load_segments_for(video)
        assert exc_info.value.sidecar == tmp_path / "holiday scenes.csv"
