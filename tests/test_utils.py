"""Unit tests for utils module."""

from datetime import datetime

import pytest

from event_folders.exceptions import DateParseError
from event_folders.utils import get_locale_profile, parse_localized_date, strip_bidi_marks


class TestStripBidiMarks:
    """Tests for strip_bidi_marks() function."""

    @pytest.mark.parametrize("text,expected", [
        ("\u200e5/\u200e3/\u200e2019", "5/3/2019"),
        ("\u200f\u200e10:15 AM", "10:15 AM"),
        ("\u202a2019\u202c", "2019"),
        ("\u2066x\u2069", "x"),
        ("\ufeff2019:05:03", "2019:05:03"),
        ("plain", "plain"),
    ])
    def test_strip_bidi_marks(self, text, expected):
        """Test that every bidi control character is removed."""
        assert strip_bidi_marks(text) == expected


class TestGetLocaleProfile:
    """Tests for get_locale_profile() function."""

    def test_case_insensitive(self):
        """Test that locale names match regardless of case."""
        assert get_locale_profile("en-gb").name == "en-GB"

    def test_unknown_locale(self):
        """Test that unsupported locales are rejected."""
        with pytest.raises(ValueError, match="Unsupported locale"):
            get_locale_profile("xx-XX")


class TestParseLocalizedDate:
    """Tests for parse_localized_date() function."""

    @pytest.mark.parametrize("locale", ["en-US", "en-GB", "el-GR", "de-DE", "fr-FR", "ISO"])
    def test_exif_format_under_every_locale(self, locale):
        """Test that the EXIF form parses whatever the locale."""
        assert parse_localized_date("2019:05:03 10:15:00", locale) == datetime(2019, 5, 3, 10, 15)

    @pytest.mark.parametrize("text,locale,expected", [
        ("5/3/2019 10:15 AM", "en-US", datetime(2019, 5, 3, 10, 15)),
        ("5/3/2019 10:15 PM", "en-US", datetime(2019, 5, 3, 22, 15)),
        ("5/3/2019 12:05 AM", "en-US", datetime(2019, 5, 3, 0, 5)),
        ("5/3/2019 12:05 PM", "en-US", datetime(2019, 5, 3, 12, 5)),
        ("5/3/2019", "en-US", datetime(2019, 5, 3)),
        ("5/3/2019", "en-GB", datetime(2019, 3, 5)),
        ("03/05/2019 22:15", "en-GB", datetime(2019, 5, 3, 22, 15)),
        ("03/05/2019 10:15 μμ", "el-GR", datetime(2019, 5, 3, 22, 15)),
        ("03/05/2019 10:15 π.μ.", "el-GR", datetime(2019, 5, 3, 10, 15)),
        ("03.05.2019 22:15", "de-DE", datetime(2019, 5, 3, 22, 15)),
        ("03/05/2019 22:15:30", "fr-FR", datetime(2019, 5, 3, 22, 15, 30)),
        ("2019-05-03T22:15:30", "ISO", datetime(2019, 5, 3, 22, 15, 30)),
        ("2019-05-03", "ISO", datetime(2019, 5, 3)),
    ])
    def test_locale_formats(self, text, locale, expected):
        """Test numeric date formats of each locale."""
        assert parse_localized_date(text, locale) == expected

    def test_windows_shell_text_with_marks(self):
        """Test text decorated with LTR/RTL marks and a narrow NBSP."""
        text = "\u200e5/\u200e3/\u200e2019 \u200f\u200e10:15\u202fPM"

        assert parse_localized_date(text, "en-US") == datetime(2019, 5, 3, 22, 15)

    def test_locale_is_explicit(self):
        """Test that the same text means different dates under different locales."""
        assert parse_localized_date("01/02/2020", "en-US").month == 1
        assert parse_localized_date("01/02/2020", "en-GB").month == 2

    @pytest.mark.parametrize("text", [
        "not a date",
        "13/45/2019",
        "2019-05-03",
        "5/3/2019 14:15 PM",
        "\u200e\u200f",
    ])
    def test_unparsable_text(self, text):
        """Test that unparsable text raises DateParseError with the raw text."""
        with pytest.raises(DateParseError) as exc_info:
            parse_localized_date(text, "en-US")

        assert exc_info.value.raw_text == text
        assert exc_info.value.locale == "en-US"

    def test_parse_error_is_value_error(self):
        """Test that DateParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_localized_date("garbage")
