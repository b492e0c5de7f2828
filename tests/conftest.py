"""Pytest configuration and fixtures."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import structlog

import zox.logging
from zox.config import Settings
from zox.models import VisitRecord
from zox.protocols import HistoryStoreProtocol
from zox.storage.history import HistoryFile

NOW = 1_700_000_000


@pytest.fixture(autouse=True, scope="session")
def _quiet_logging():
    """Silence structlog for the session so no test writes to a closed stream."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL))
    zox.logging._configured = True
    yield
    structlog.reset_defaults()


@pytest.fixture
def now() -> int:
    """A fixed current time."""
    return NOW


# Settings fixtures


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Location of a history file inside the temp dir."""
    return tmp_path / "data" / ".z"


@pytest.fixture
def test_settings(data_file: Path) -> Settings:
    """Create test settings pointing at a temp history file."""
    return Settings(data_file=data_file)


# Record fixtures


@pytest.fixture
def sample_records() -> list[VisitRecord]:
    """A small history with a mix of ranks and ages."""
    return [
        VisitRecord(path="/home/user/src/foo", rank=10.0, time=NOW - 30),
        VisitRecord(path="/home/user/src/bar", rank=3.0, time=NOW - 2 * 86400),
        VisitRecord(path="/home/user/Documents/Foo-Notes", rank=25.0, time=NOW - 30 * 86400),
        VisitRecord(path="/var/log", rank=1.5, time=NOW - 7200),
    ]


@pytest.fixture
def history_file(data_file: Path) -> HistoryFile:
    """A history file store backed by the temp dir."""
    return HistoryFile(data_file)


# Protocol mock fixtures


@pytest.fixture
def mock_store(sample_records: list[VisitRecord]) -> HistoryStoreProtocol:
    """Create a mock history store implementing the protocol."""
    mock = MagicMock(spec=HistoryStoreProtocol)
    mock.load.return_value = [r.model_copy() for r in sample_records]
    return mock
