"""Unit tests for scanner.directory module."""

from datetime import datetime
from pathlib import Path

import pytest

from event_folders.scanner import directory as directory_module
from event_folders.scanner.directory import (
    collect_files,
    creation_time,
    list_subdirectories,
    scan_folder,
)


class TestListSubdirectories:
    """Tests for list_subdirectories() function."""

    def test_list_subdirectories_empty(self, tmp_path):
        """Test listing subdirectories in empty directory."""
        assert list_subdirectories(tmp_path) == []

    def test_list_subdirectories_sorted(self, tmp_path):
        """Test that subdirectories are returned sorted by name."""
        for name in ("b", "c", "a"):
            (tmp_path / name).mkdir()

        result = list_subdirectories(tmp_path)

        assert [d.name for d in result] == ["a", "b", "c"]

    def test_list_subdirectories_not_recursive(self, tmp_path):
        """Test that only immediate children are listed and files ignored."""
        (tmp_path / "dir1" / "nested").mkdir(parents=True)
        (tmp_path / "file.txt").write_text("test")

        result = list_subdirectories(tmp_path)

        assert [d.name for d in result] == ["dir1"]

    def test_list_subdirectories_nonexistent(self, tmp_path):
        """Test that a missing directory raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            list_subdirectories(tmp_path / "missing")

    def test_list_subdirectories_not_a_directory(self, tmp_path):
        """Test that a file raises NotADirectoryError."""
        path = tmp_path / "file.txt"
        path.write_text("test")

        with pytest.raises(NotADirectoryError):
            list_subdirectories(path)


class TestCollectFiles:
    """Tests for collect_files() function."""

    def test_collect_recursive_with_hidden(self, tmp_path):
        """Test that nested and hidden files are all collected."""
        (tmp_path / "sub" / ".hidden_dir").mkdir(parents=True)
        files = [
            tmp_path / "a.jpg",
            tmp_path / ".hidden.jpg",
            tmp_path / "sub" / "b.mov",
            tmp_path / "sub" / ".hidden_dir" / "c.txt",
        ]
        for f in files:
            f.write_text("test")

        result = collect_files(tmp_path)

        assert set(result) == set(files)
        assert result == sorted(result)

    def test_collect_empty(self, tmp_path):
        """Test that an empty directory yields no files."""
        (tmp_path / "empty_sub").mkdir()

        assert collect_files(tmp_path) == []


class TestCreationTime:
    """Tests for creation_time() function."""

    def test_creation_time_is_datetime(self, tmp_path):
        """Test that a naive datetime is returned."""
        path = tmp_path / "a.jpg"
        path.write_text("test")

        result = creation_time(path)

        assert isinstance(result, datetime)
        assert result.tzinfo is None

    def test_creation_time_missing_file(self, tmp_path):
        """Test that a missing file raises OSError."""
        with pytest.raises(OSError):
            creation_time(tmp_path / "missing.jpg")


class TestScanFolder:
    """Tests for scan_folder() function."""

    def test_scan_folder_records(self, make_folder, creation_times):
        """Test that every file becomes a FileRecord with its creation time."""
        creation_times["a.jpg"] = datetime(2019, 11, 1)
        folder_path = make_folder("Trip", "a.jpg", "sub/b.jpg")

        folder = scan_folder(folder_path)

        assert folder.name == "Trip"
        assert folder.path == folder_path
        assert {f.path.name for f in folder.files} == {"a.jpg", "b.jpg"}
        by_name = {f.path.name: f for f in folder.files}
        assert by_name["a.jpg"].created_at == datetime(2019, 11, 1)
        assert folder.existing_prefix is None
        assert folder.existing_tag is None

    def test_scan_folder_existing_prefix_and_tag(self, make_folder, creation_times):
        """Test that prefix and tag are parsed from the name."""
        folder_path = make_folder("2021-06 - [Easter 2021]", "a.jpg")

        folder = scan_folder(folder_path)

        assert folder.existing_prefix.year == 2021
        assert folder.existing_prefix.month == 6
        assert folder.existing_tag == "[Easter 2021]"

    def test_scan_folder_name_override(self, make_folder, creation_times):
        """Test evaluating a folder under a planned name."""
        folder_path = make_folder("Trip", "a.jpg")

        folder = scan_folder(folder_path, "2019-11 - Trip")

        assert folder.name == "2019-11 - Trip"
        assert folder.path == folder_path
        assert folder.existing_prefix.remainder == "Trip"

    def test_scan_folder_unreadable_files(self, make_folder, monkeypatch, caplog):
        """Test that files whose creation time fails are set aside."""
        folder_path = make_folder("Trip", "a.jpg")

        def failing_creation_time(path: Path) -> datetime:
            raise PermissionError("denied")

        monkeypatch.setattr(directory_module, "creation_time", failing_creation_time)

        folder = scan_folder(folder_path)

        assert folder.files == []
        assert folder.unreadable_files == [folder_path / "a.jpg"]
        assert not folder.is_empty
        assert "Could not read creation time" in caplog.text

    def test_scan_empty_folder(self, make_folder, creation_times):
        """Test that an empty folder is reported as empty."""
        folder = scan_folder(make_folder("Nothing"))

        assert folder.is_empty
