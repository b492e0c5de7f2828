"""Tests for the flat history file."""

from pathlib import Path

import pytest

from zox.models import VisitRecord
from zox.storage.history import HistoryFile, format_record, parse_line


class TestParseLine:
    """Tests for single-line parsing."""

    def test_parse_valid_line(self):
        record = parse_line("/home/user/src|12.5|1700000000\n")
        assert record == VisitRecord(path="/home/user/src", rank=12.5, time=1700000000)

    def test_parse_integer_rank(self):
        record = parse_line("/a|3|100")
        assert record is not None
        assert record.rank == 3.0

    def test_parse_exponent_rank(self):
        record = parse_line("/a|1.5e3|100")
        assert record is not None
        assert record.rank == 1500.0

    def test_path_keeps_separator(self):
        """Only the last two separators split fields."""
        record = parse_line("/odd|dir|2.0|100")
        assert record is not None
        assert record.path == "/odd|dir"

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "/a",
            "/a|1.0",
            "/a|one|100",
            "/a|1.0|later",
            "/a|1.0|1.5",
            "/a|-1.0|100",
            "/a|nan|100",
            "/a|inf|100",
            "/a|1.0|-5",
            "|1.0|100",
            "/a|1.0|1_000",
            "/a|1_0.0|100",
            "/a| 1.0|100",
            "/a|1.0| 100",
            "/a|1.0|+100",
            "/a|1.0|\u0661\u0660\u0660",
        ],
    )
    def test_malformed_lines_rejected(self, line: str):
        assert parse_line(line) is None


class TestFormatRecord:
    """Tests for serialization."""

    def test_format_record(self):
        record = VisitRecord(path="/a", rank=2.0, time=1500)
        assert format_record(record) == "/a|2.0|1500"

    def test_format_keeps_full_precision(self):
        record = VisitRecord(path="/a", rank=0.1 + 0.2, time=1)
        parsed = parse_line(format_record(record))
        assert parsed is not None
        assert parsed.rank == record.rank


class TestHistoryFile:
    """Tests for HistoryFile load/save."""

    def test_missing_file_is_empty(self, history_file: HistoryFile):
        assert history_file.load() == []

    def test_round_trip(self, history_file: HistoryFile, sample_records: list[VisitRecord]):
        """Saved records load back equal and in order."""
        history_file.save(sample_records)
        assert history_file.load() == sample_records

    def test_save_creates_parent_directory(self, tmp_path: Path):
        store = HistoryFile(tmp_path / "nested" / "dir" / ".z")
        store.save([VisitRecord(path="/a", rank=1.0, time=1)])
        assert (tmp_path / "nested" / "dir" / ".z").exists()

    def test_save_format_on_disk(self, history_file: HistoryFile, data_file: Path):
        history_file.save(
            [
                VisitRecord(path="/a", rank=2.0, time=1500),
                VisitRecord(path="/b", rank=1.25, time=1000),
            ]
        )
        assert data_file.read_text() == "/a|2.0|1500\n/b|1.25|1000\n"

    def test_malformed_lines_skipped(self, history_file: HistoryFile, data_file: Path):
        """Bad lines are dropped without losing the good ones."""
        data_file.parent.mkdir(parents=True)
        data_file.write_text("/a|1.0|100\ngarbage\n\n/b|x|1\n/c|2.5|200\n")
        records = history_file.load()
        assert [r.path for r in records] == ["/a", "/c"]

    def test_save_replaces_previous_contents(self, history_file: HistoryFile):
        history_file.save([VisitRecord(path="/a", rank=1.0, time=1)])
        history_file.save([VisitRecord(path="/b", rank=1.0, time=2)])
        assert [r.path for r in history_file.load()] == ["/b"]

    def test_save_leaves_no_temp_files(self, history_file: HistoryFile, data_file: Path):
        history_file.save([VisitRecord(path="/a", rank=1.0, time=1)])
        assert [p.name for p in data_file.parent.iterdir()] == [".z"]

    def test_undecodable_bytes_round_trip(self, history_file: HistoryFile, data_file: Path):
        """Non-UTF-8 path bytes survive load and save."""
        data_file.parent.mkdir(parents=True)
        data_file.write_bytes(b"/caf\xe9|1.0|100\n")
        history_file.save(history_file.load())
        assert data_file.read_bytes() == b"/caf\xe9|1.0|100\n"

    def test_unwritable_destination_raises(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = HistoryFile(blocker / ".z")
        with pytest.raises(OSError):
            store.save([VisitRecord(path="/a", rank=1.0, time=1)])

    def test_unreadable_file_is_empty(self, tmp_path: Path):
        """A path that cannot be read as a file loads as an empty history."""
        directory = tmp_path / "is_a_dir"
        directory.mkdir()
        assert HistoryFile(directory).load() == []
