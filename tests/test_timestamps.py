"""Tests for permissive timestamp parsing."""

from datetime import date, datetime, timedelta, timezone

import pytest

from meta_events.definition import parse_timestamp
from meta_events.exceptions import InvalidTimestampError


class TestParseTimestamp:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2014-02-04", datetime(2014, 2, 4)),
            ("2014-02-04T10:30:00", datetime(2014, 2, 4, 10, 30)),
            ("2014-02-04 10:30", datetime(2014, 2, 4, 10, 30)),
            ("2014/02/04", datetime(2014, 2, 4)),
            ("02/04/2014", datetime(2014, 2, 4)),
            ("Feb 4, 2014", datetime(2014, 2, 4)),
            ("February 4, 2014", datetime(2014, 2, 4)),
            ("4 February 2014", datetime(2014, 2, 4)),
            ("  2014-02-04  ", datetime(2014, 2, 4)),
        ],
    )
    def test_text_formats(self, raw, expected):
        assert parse_timestamp(raw) == expected

    def test_trailing_z_is_utc(self):
        assert parse_timestamp("2014-02-04T10:00:00Z") == datetime(2014, 2, 4, 10, tzinfo=timezone.utc)

    def test_offset(self):
        parsed = parse_timestamp("2014-02-04T10:00:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_datetime_passthrough(self):
        value = datetime(2014, 2, 4, 1, 2, 3)
        assert parse_timestamp(value) is value

    def test_date_becomes_midnight(self):
        assert parse_timestamp(date(2014, 2, 4)) == datetime(2014, 2, 4)

    def test_epoch_seconds(self):
        assert parse_timestamp(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("raw", ["", "soon", "2014-13-45", True, None, [2014, 2, 4]])
    def test_invalid(self, raw):
        with pytest.raises(InvalidTimestampError) as exc:
            parse_timestamp(raw, "introduced_at")
        assert exc.value.field_name == "introduced_at"
        assert "introduced_at" in str(exc.value)
