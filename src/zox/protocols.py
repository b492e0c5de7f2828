"""Protocols for dependency injection."""

from typing import Protocol

from zox.models import VisitRecord


class HistoryStoreProtocol(Protocol):
    """Interface for visit history persistence."""

    def load(self) -> list[VisitRecord]:
        """Load all records, in stored order."""
        ...

    def save(self, records: list[VisitRecord]) -> None:
        """Replace the stored history with the given records."""
        ...
