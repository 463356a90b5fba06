"""Shared fixtures for the bulk renamer tests."""

import io
import os
import sys
from datetime import datetime

# Add project root to sys.path so the top-level modules can be imported
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from prompt_session import PromptSession


def set_mtime(path, year, month, day):
    # noon keeps the local date stable whatever the timezone
    ts = datetime(year, month, day, 12, 0, 0).timestamp()
    os.utime(path, (ts, ts))


@pytest.fixture
def make_folder(tmp_path):
    """Create a folder holding the given files; values are (y, m, d) mtimes or None."""

    def _make(files, name="photos"):
        folder = tmp_path / name
        folder.mkdir()
        for fname, mtime in files.items():
            path = folder / fname
            path.write_text(fname)
            if mtime:
                set_mtime(path, *mtime)
        return folder

    return _make


@pytest.fixture
def scripted_session():
    """Build a PromptSession fed from a list of answers."""

    def _session(*answers):
        text = "".join(f"{a}\n" for a in answers)
        return PromptSession(io.StringIO(text), io.StringIO(), io.StringIO())

    return _session


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2025, 3, 7, 9, 30)
