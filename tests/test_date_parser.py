# ABOUTME: Tests for the EXIF date string parser.
# ABOUTME: Validates every supported format, input normalization and non-matching input.

from datetime import datetime

import pytest

from photo_organizer.metadata.date_parser import EXIF_DATE_FORMATS, parse_exif_date

SAMPLES = [
    datetime(2023, 6, 15, 10, 30, 0),
    datetime(1999, 12, 31, 23, 59, 0),
    datetime(2024, 2, 29, 0, 0, 0),
]


class TestSupportedFormats:
    """Each format parses what it formats."""

    @pytest.mark.parametrize("fmt", EXIF_DATE_FORMATS)
    @pytest.mark.parametrize("moment", SAMPLES)
    def test_format_then_parse_returns_same_moment(self, fmt, moment):
        assert parse_exif_date(moment.strftime(fmt)) == moment

    def test_exif_convention_is_tried_first(self):
        assert EXIF_DATE_FORMATS[0] == "%Y:%m:%d %H:%M:%S"

    def test_minutes_only_variant(self):
        assert parse_exif_date("2023:06:15 10:30") == datetime(2023, 6, 15, 10, 30)

    def test_iso_variant(self):
        assert parse_exif_date("2023-06-15T10:30:45") == datetime(2023, 6, 15, 10, 30, 45)


class TestNormalization:
    """Whitespace and one layer of quotes are stripped before matching."""

    def test_surrounding_whitespace(self):
        assert parse_exif_date("  2023:06:15 10:30:00\n") == datetime(2023, 6, 15, 10, 30)

    def test_double_quotes(self):
        assert parse_exif_date('"2023:06:15 10:30:00"') == datetime(2023, 6, 15, 10, 30)

    def test_single_quotes(self):
        assert parse_exif_date("'2023:06:15 10:30:00'") == datetime(2023, 6, 15, 10, 30)

    def test_quotes_inside_whitespace(self):
        assert parse_exif_date(' "2023:06:15 10:30:00" ') == datetime(2023, 6, 15, 10, 30)

    def test_only_one_layer_of_quotes_removed(self):
        assert parse_exif_date('""2023:06:15 10:30:00""') is None

    def test_unbalanced_quote_is_kept(self):
        assert parse_exif_date('"2023:06:15 10:30:00') is None


class TestNoMatch:
    """Unparseable input yields None, never an exception."""

    @pytest.mark.parametrize("raw", [
        "not a date",
        "",
        "   ",
        '""',
        "2023:06:15",
        "0000:00:00 00:00:00",
        "2023:13:01 10:00:00",
        "15/06/2023 10:30:00",
    ])
    def test_returns_none(self, raw):
        assert parse_exif_date(raw) is None

    def test_none_input(self):
        assert parse_exif_date(None) is None

    def test_non_string_input(self):
        assert parse_exif_date(20230615) is None

    def test_deterministic(self):
        raw = "2023/06/15 10:30:00"
        assert parse_exif_date(raw) == parse_exif_date(raw)
