"""Tests for date formatting, placeholder substitution and collision suffixes."""

from datetime import datetime
from pathlib import Path

import pytest

from name_template import (
    FileEntry,
    format_date,
    list_entries,
    resolve_batch_names,
    resolve_template,
    substitute_today,
    today_date,
)


def entries_for(*names, folder="/data"):
    return [FileEntry.from_path(Path(folder) / n) for n in names]


class TestDates:
    def test_format_date_zero_pads(self):
        assert format_date(datetime(2024, 1, 5, 23, 59)) == "2024-01-05"

    def test_today_date_uses_clock(self, fixed_clock):
        assert today_date(fixed_clock) == "2025-03-07"


class TestFileEntry:
    @pytest.mark.parametrize(
        "name, ext",
        [
            ("A.TXT", ".txt"),
            ("archive.tar.GZ", ".gz"),
            ("README", ""),
            (".bashrc", ""),
        ],
    )
    def test_extension_is_lowercased(self, name, ext):
        assert FileEntry.from_path(Path("/data") / name).ext == ext

    def test_entry_keeps_path(self):
        entry = FileEntry.from_path(Path("/data") / "a.txt")
        assert entry.name == "a.txt"
        assert entry.path == Path("/data/a.txt")

    def test_list_entries_includes_directories(self, make_folder):
        folder = make_folder({"b.txt": None, "a.txt": None})
        (folder / "sub.d").mkdir()
        entries = list_entries(str(folder))
        assert [e.name for e in entries] == ["a.txt", "b.txt", "sub.d"]
        assert entries[2].ext == ".d"

    def test_list_entries_expands_home(self, make_folder, monkeypatch):
        folder = make_folder({"a.txt": None})
        monkeypatch.setenv("HOME", str(folder.parent))
        assert [e.name for e in list_entries(f"~/{folder.name}")] == ["a.txt"]

    def test_list_entries_missing_folder(self, tmp_path):
        with pytest.raises(OSError):
            list_entries(str(tmp_path / "nope"))


class TestTemplates:
    def test_today_replaced_once(self):
        moment = datetime(2024, 2, 29)
        assert substitute_today("{today}_{today}", moment) == "2024-02-29_{today}"

    def test_modified_at_uses_file_time(self):
        ts = datetime(2024, 1, 1, 12).timestamp()
        assert resolve_template("{modifiedAt}", "x", lambda p: ts) == "2024-01-01"

    def test_modified_at_replaced_once(self):
        ts = datetime(2024, 1, 1, 12).timestamp()
        result = resolve_template("{modifiedAt} {modifiedAt}", "x", lambda p: ts)
        assert result == "2024-01-01 {modifiedAt}"

    def test_plain_template_skips_stat(self):
        def boom(path):
            raise AssertionError("stat should not be called")

        assert resolve_template("holiday", "x", boom) == "holiday"


class TestBatchNames:
    def test_distinct_names_get_no_suffix(self, make_folder):
        folder = make_folder({"A.TXT": (2024, 1, 1), "B.txt": (2024, 1, 2)})
        names = resolve_batch_names(list_entries(str(folder)), "{modifiedAt}")
        assert names == ["2024-01-01", "2024-01-02"]

    def test_shared_name_numbered_in_input_order(self):
        names = resolve_batch_names(entries_for("x.png", "y.jpg"), "photo")
        assert names == ["photo - 1", "photo - 2"]

    def test_only_colliding_names_get_suffix(self):
        times = {"a": 1, "b": 2, "c": 1}
        ts = {k: datetime(2024, 5, v, 12).timestamp() for k, v in times.items()}
        entries = entries_for("a", "b", "c")
        names = resolve_batch_names(
            entries, "{modifiedAt}", lambda p: ts[p.name]
        )
        assert names == ["2024-05-01 - 1", "2024-05-02", "2024-05-01 - 2"]

    def test_single_file_static_template(self):
        assert resolve_batch_names(entries_for("a.txt"), "report") == ["report"]

    def test_empty_batch(self):
        assert resolve_batch_names([], "x") == []
