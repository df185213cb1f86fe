"""Pytest configuration and shared fixtures."""

from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest

from event_folders.scanner import directory as directory_module


@pytest.fixture
def date_taken_texts() -> Dict[str, Optional[str]]:
    """Date-taken text per file name, served by the fake_reader fixture."""
    return {}


@pytest.fixture
def fake_reader(date_taken_texts) -> Callable[[Path, int], Optional[str]]:
    """A metadata reader that answers from date_taken_texts and counts calls."""
    def reader(file_path: Path, tag: int) -> Optional[str]:
        reader.calls.append(file_path)
        return date_taken_texts.get(file_path.name)

    reader.calls = []
    return reader


@pytest.fixture
def creation_times(monkeypatch) -> Dict[str, datetime]:
    """
    Creation time per file name.

    File systems do not let tests set creation times, so the scanner's
    creation_time is replaced by a lookup; unknown names get 2030-01-01.
    """
    times: Dict[str, datetime] = {}

    def fake_creation_time(file_path: Path) -> datetime:
        return times.get(file_path.name, datetime(2030, 1, 1))

    monkeypatch.setattr(directory_module, "creation_time", fake_creation_time)
    return times


@pytest.fixture
def events_root(tmp_path: Path) -> Path:
    """An empty root directory for event folders."""
    root = tmp_path / "events"
    root.mkdir()
    return root


@pytest.fixture
def make_folder(events_root: Path) -> Callable[..., Path]:
    """Create an event folder holding the given (relative) file names."""
    def _make(name: str, *files: str) -> Path:
        folder = events_root / name
        folder.mkdir()
        for file_name in files:
            path = folder / file_name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("test")
        return folder

    return _make
