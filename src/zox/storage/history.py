"""Flat-file persistence of visit records."""

import re
import tempfile
from pathlib import Path

import structlog
from pydantic import ValidationError

from zox.models import VisitRecord

log = structlog.get_logger()

FIELD_SEPARATOR = "|"

# Paths are byte strings on POSIX; surrogateescape keeps undecodable bytes intact.
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"

# Plain decimal numbers only: no whitespace, digit-group underscores or words.
RANK_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
TIME_PATTERN = re.compile(r"[0-9]+")


def parse_line(line: str) -> VisitRecord | None:
    """Parse one ``path|rank|time`` line.

    The path is everything before the last two separators.

    Args:
        line: A line from the history file, with or without trailing newline.

    Returns:
        The parsed record, or None if the line is malformed.
    """
    parts = line.rstrip("\r\n").rsplit(FIELD_SEPARATOR, 2)
    if len(parts) != 3:
        return None

    path, raw_rank, raw_time = parts
    if not RANK_PATTERN.fullmatch(raw_rank) or not TIME_PATTERN.fullmatch(raw_time):
        return None
    try:
        return VisitRecord(path=path, rank=float(raw_rank), time=int(raw_time))
    except ValidationError:
        return None


def format_record(record: VisitRecord) -> str:
    """Serialize a record as a ``path|rank|time`` line (no newline)."""
    return f"{record.path}{FIELD_SEPARATOR}{record.rank!r}{FIELD_SEPARATOR}{record.time}"


class HistoryFile:
    """Reads and atomically rewrites the history file."""

    def __init__(self, path: Path) -> None:
        """Initialize the history file.

        Args:
            path: Location of the history file. It need not exist yet.
        """
        self.path = Path(path)

    def load(self) -> list[VisitRecord]:
        """Load all well-formed records, in file order.

        A missing or unreadable file yields an empty history.
        """
        if not self.path.exists():
            log.debug("history_file_not_found", path=str(self.path))
            return []

        records: list[VisitRecord] = []
        skipped = 0
        try:
            with open(self.path, encoding=ENCODING, errors=ENCODING_ERRORS) as f:
                for line_number, line in enumerate(f, start=1):
                    if not line.strip():
                        continue
                    record = parse_line(line)
                    if record is None:
                        skipped += 1
                        log.debug("history_line_skipped", line_number=line_number)
                        continue
                    records.append(record)
        except OSError as e:
            log.warning("history_load_failed", path=str(self.path), error=str(e))
            return []

        log.debug("history_loaded", records_count=len(records), skipped=skipped)
        return records

    def save(self, records: list[VisitRecord]) -> None:
        """Write records to disk atomically (write to temp, then rename).

        Raises:
            OSError: If the directory or file cannot be written.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with open(fd, "w", encoding=ENCODING, errors=ENCODING_ERRORS) as f:
                for record in records:
                    f.write(format_record(record))
                    f.write("\n")
            Path(tmp_path).replace(self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        log.debug("history_saved", path=str(self.path), records_count=len(records))
