"""Visit service - records visits and ages the history."""

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from zox.models import VisitRecord
from zox.protocols import HistoryStoreProtocol

log = structlog.get_logger()

# Once the summed rank passes this, every rank decays so old entries fade out.
DEFAULT_MAX_TOTAL_RANK = 9000.0
DEFAULT_DECAY_FACTOR = 0.99
# Records below this rank after aging are dropped.
DEFAULT_MIN_RANK = 1.0


def apply_visit(
    records: list[VisitRecord],
    path: str,
    now: int,
    home: str | None = None,
    exclude: Iterable[str] = (),
) -> list[VisitRecord]:
    """Record one visit to a path.

    An existing record (exact path match) gains 1.0 rank and moves to ``now``;
    otherwise a new record with rank 1.0 is appended. The home directory and
    excluded paths are never recorded.

    Args:
        records: The history, mutated in place.
        path: The visited path.
        now: Current Unix time in seconds.
        home: The user's home directory as a string.
        exclude: Additional paths to ignore.

    Returns:
        The same list, for chaining.
    """
    if path == home or path in exclude:
        return records

    for record in records:
        if record.path == path:
            record.rank += 1.0
            record.time = max(record.time, now)
            return records

    records.append(VisitRecord(path=path, rank=1.0, time=now))
    return records


def apply_visits(
    records: list[VisitRecord],
    paths: Iterable[str],
    now: int,
    home: str | None = None,
    exclude: Iterable[str] = (),
) -> list[VisitRecord]:
    """Apply a batch of visits in order; repeated paths count each time."""
    excluded = set(exclude)
    for path in paths:
        apply_visit(records, path, now, home=home, exclude=excluded)
    return records


def merge_duplicates(records: list[VisitRecord]) -> list[VisitRecord]:
    """Collapse records sharing a path into the first occurrence.

    Ranks are summed and the latest visit time is kept.
    """
    by_path: dict[str, VisitRecord] = {}
    for record in records:
        existing = by_path.get(record.path)
        if existing is None:
            by_path[record.path] = record.model_copy()
        else:
            existing.rank += record.rank
            existing.time = max(existing.time, record.time)
    return list(by_path.values())


def maintain(
    records: list[VisitRecord],
    max_total: float = DEFAULT_MAX_TOTAL_RANK,
    decay: float = DEFAULT_DECAY_FACTOR,
    min_rank: float = DEFAULT_MIN_RANK,
) -> list[VisitRecord]:
    """Age the history: merge duplicates, decay if oversized, prune low ranks.

    Args:
        records: The history after all visits have been applied.
        max_total: Summed rank above which every rank is decayed.
        decay: Multiplier applied to every rank when decaying.
        min_rank: Records ranked below this are dropped.

    Returns:
        A new list of surviving records, in their original order.
    """
    merged = merge_duplicates(records)

    total = sum(record.rank for record in merged)
    if total > max_total:
        for record in merged:
            record.rank *= decay
        log.debug("history_decayed", total=total, factor=decay)

    kept = [record for record in merged if record.rank >= min_rank]
    if len(kept) < len(merged):
        log.debug("history_pruned", count=len(merged) - len(kept))
    return kept


@dataclass
class VisitOutcome:
    """Domain result from recording visits."""

    visited: int
    ignored: int
    records_count: int
    pruned: int
    decayed: bool


class VisitService:
    """Records visits: load, apply, maintain, persist."""

    def __init__(
        self,
        store: HistoryStoreProtocol,
        home: str | None = None,
        exclude: Iterable[str] = (),
        max_total: float = DEFAULT_MAX_TOTAL_RANK,
        decay: float = DEFAULT_DECAY_FACTOR,
        min_rank: float = DEFAULT_MIN_RANK,
    ) -> None:
        self.store = store
        self.home = home
        self.exclude = set(exclude)
        self.max_total = max_total
        self.decay = decay
        self.min_rank = min_rank

    def record(self, paths: list[str], now: int) -> VisitOutcome:
        """Record a batch of visits and write the aged history back.

        Args:
            paths: Visited paths, applied in order.
            now: Current Unix time in seconds.

        Returns:
            VisitOutcome with counts.

        Raises:
            OSError: If the history cannot be written.
        """
        records = self.store.load()
        ignored = sum(1 for path in paths if path == self.home or path in self.exclude)

        apply_visits(records, paths, now, home=self.home, exclude=self.exclude)

        before = len(merge_duplicates(records))
        decayed = sum(record.rank for record in records) > self.max_total
        records = maintain(records, self.max_total, self.decay, self.min_rank)

        self.store.save(records)

        outcome = VisitOutcome(
            visited=len(paths) - ignored,
            ignored=ignored,
            records_count=len(records),
            pruned=before - len(records),
            decayed=decayed,
        )
        log.info(
            "visits_recorded",
            visited=outcome.visited,
            ignored=outcome.ignored,
            records_count=outcome.records_count,
            pruned=outcome.pruned,
        )
        return outcome
