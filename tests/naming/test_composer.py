"""Unit tests for naming.composer module."""

from datetime import datetime

import pytest

from event_folders.models import BracketStyle, Category, DateSource, NamingRule, ResolvedDate
from event_folders.naming.composer import compose_date_prefix_name, compose_tag, compose_tag_name


class TestComposeDatePrefixName:
    """Tests for compose_date_prefix_name() function."""

    def test_prefix(self):
        resolved = ResolvedDate(datetime(2019, 11, 1, 14, 3), DateSource.EMBEDDED_METADATA)

        assert compose_date_prefix_name(resolved, "Trip") == "2019-11 - Trip"

    def test_month_zero_padded(self):
        resolved = ResolvedDate(datetime(2018, 3, 10), DateSource.CREATION_TIME)

        assert compose_date_prefix_name(resolved, "Ski (2)") == "2018-03 - Ski (2)"


class TestComposeTag:
    """Tests for compose_tag() function."""

    @pytest.mark.parametrize("style,expected", [
        (BracketStyle.SQUARE, "[Easter 2021]"),
        (BracketStyle.ROUND, "(Easter 2021)"),
    ])
    def test_styles(self, style, expected):
        assert compose_tag(NamingRule(Category.EASTER, 2021), style) == expected


class TestComposeTagName:
    """Tests for compose_tag_name() function."""

    def test_christmas_drops_name(self):
        rule = NamingRule(Category.CHRISTMAS, 2015)

        assert compose_tag_name("2015-12 - ", rule) == "2015-12 - [Christmas 2015]"

    def test_birthday_keeps_name(self):
        rule = NamingRule(Category.BIRTHDAY, 2016, base_name="Family Gathering")

        assert compose_tag_name("2016-08 - ", rule) == "2016-08 - [BIRTHDAY 2016] - Family Gathering"

    def test_birthday_empty_name(self):
        rule = NamingRule(Category.BIRTHDAY, 2019, base_name="")

        assert compose_tag_name("2019-04 - ", rule) == "2019-04 - [BIRTHDAY 2019]"

    def test_round_brackets(self):
        rule = NamingRule(Category.BIRTHDAY, 2016, base_name="Anna")

        assert compose_tag_name("2016-08 - ", rule, BracketStyle.ROUND) == "2016-08 - (BIRTHDAY 2016) - Anna"

    def test_prefix_kept_verbatim(self):
        rule = NamingRule(Category.EASTER, 2021)

        assert compose_tag_name("2021-04  -  ", rule) == "2021-04  -  [Easter 2021]"

    def test_without_prefix(self):
        rule = NamingRule(Category.EASTER, 2021)

        assert compose_tag_name(None, rule) == "[Easter 2021]"
