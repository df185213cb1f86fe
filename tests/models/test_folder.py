"""Unit tests for folder, file and naming models."""

from dataclasses import FrozenInstanceError
from datetime import datetime
from pathlib import Path

import pytest

from event_folders.models import (
    BracketStyle,
    Category,
    DateSource,
    FileRecord,
    FolderRecord,
    NamingRule,
    ResolvedDate,
    YearSource,
)


class TestResolvedDate:
    """Tests for the ResolvedDate value object."""

    def test_year_month_prefix(self):
        """Test derived year, month and prefix."""
        resolved = ResolvedDate(datetime(2019, 3, 1, 8, 30), DateSource.EMBEDDED_METADATA)

        assert resolved.year == 2019
        assert resolved.month == 3
        assert resolved.prefix == "2019-03"

    def test_immutable(self):
        """Test that a ResolvedDate cannot be modified."""
        resolved = ResolvedDate(datetime(2019, 3, 1), DateSource.CREATION_TIME)

        with pytest.raises(FrozenInstanceError):
            resolved.value = datetime(2020, 1, 1)

    def test_source_values(self):
        """Test the provenance tags."""
        assert DateSource.EMBEDDED_METADATA.value == "embedded-metadata"
        assert DateSource.CREATION_TIME.value == "creation-time"


class TestFolderRecord:
    """Tests for FolderRecord."""

    def test_name_defaults_to_path(self):
        """Test that the name comes from the path when not given."""
        folder = FolderRecord(path=Path("/events/Trip"))

        assert folder.name == "Trip"
        assert folder.earliest_date is None
        assert folder.is_empty

    def test_explicit_name(self):
        """Test that an explicit name overrides the path's."""
        folder = FolderRecord(path=Path("/events/Trip"), name="2019-11 - Trip")

        assert folder.name == "2019-11 - Trip"

    def test_not_empty_with_files(self):
        """Test is_empty with files present."""
        record = FileRecord(path=Path("/events/Trip/a.jpg"), created_at=datetime(2020, 1, 1))
        folder = FolderRecord(path=Path("/events/Trip"), files=[record])

        assert not folder.is_empty
        assert record.date_taken is None

    def test_not_empty_with_unreadable_files(self):
        """Test that unreadable files still make the folder non-empty."""
        folder = FolderRecord(
            path=Path("/events/Trip"), unreadable_files=[Path("/events/Trip/a.jpg")]
        )

        assert not folder.is_empty


class TestNamingRule:
    """Tests for NamingRule and its enums."""

    def test_defaults(self):
        """Test default year source and base name."""
        rule = NamingRule(Category.EASTER, 2021)

        assert rule.year_source == YearSource.NAME
        assert rule.base_name == ""

    @pytest.mark.parametrize("category,literal", [
        (Category.CHRISTMAS, "Christmas"),
        (Category.EASTER, "Easter"),
        (Category.BIRTHDAY, "BIRTHDAY"),
    ])
    def test_category_literals(self, category, literal):
        """Test the literals written into folder names."""
        assert category.value == literal


class TestBracketStyle:
    """Tests for BracketStyle."""

    def test_square(self):
        assert BracketStyle.SQUARE.wrap("Easter 2021") == "[Easter 2021]"

    def test_round(self):
        assert BracketStyle.ROUND.wrap("Easter 2021") == "(Easter 2021)"

    def test_from_value(self):
        assert BracketStyle("round") is BracketStyle.ROUND
