"""Query service - resolves fragments to visited directories."""

from collections.abc import Iterable

import structlog

from zox.models import MatchMode, SortMode, VisitRecord
from zox.protocols import HistoryStoreProtocol
from zox.search.matching import matches, normalize_patterns
from zox.search.ranking import sort_descending, sort_key

log = structlog.get_logger()


def query(
    records: Iterable[VisitRecord],
    patterns: list[str],
    sort_mode: SortMode,
    now: int,
    want_list: bool,
    match_mode: MatchMode = MatchMode.ORDERED,
) -> list[VisitRecord] | VisitRecord | None:
    """Filter and order records for a lookup.

    With no patterns every record is returned by rank, highest first,
    whatever the sort mode; this dumps the raw history.

    Args:
        records: The history, in stored order.
        patterns: Query fragments; lowercased before matching.
        sort_mode: Score used to order matches.
        now: Current Unix time in seconds.
        want_list: Return every match instead of only the best one.
        match_mode: Matching strategy.

    Returns:
        The ordered matches, the best match, or None if nothing matched.
    """
    if not patterns:
        return sort_descending(records, lambda record: record.rank)

    lowered = normalize_patterns(patterns)
    candidates = [record for record in records if matches(record.path, lowered, match_mode)]
    ranked = sort_descending(candidates, lambda record: sort_key(record, sort_mode, now))

    if want_list:
        return ranked
    return ranked[0] if ranked else None


class QueryService:
    """Runs read-only lookups against the stored history."""

    def __init__(
        self,
        store: HistoryStoreProtocol,
        match_mode: MatchMode = MatchMode.ORDERED,
    ) -> None:
        self.store = store
        self.match_mode = match_mode

    def list_all(self) -> list[VisitRecord]:
        """Every record, highest rank first."""
        return sort_descending(self.store.load(), lambda record: record.rank)

    def search(
        self,
        patterns: list[str],
        now: int,
        sort_mode: SortMode = SortMode.FRECENT,
    ) -> list[VisitRecord]:
        """All records matching the patterns, best first.

        Args:
            patterns: Query fragments.
            now: Current Unix time in seconds.
            sort_mode: Score used to order matches.

        Returns:
            Ordered matches; empty if none.
        """
        records = self.store.load()
        results = query(
            records, patterns, sort_mode, now, want_list=True, match_mode=self.match_mode
        )
        log.debug(
            "query_completed",
            patterns=patterns,
            sort_mode=sort_mode.value,
            candidates=len(records),
            results_count=len(results),
        )
        return results

    def best(
        self,
        patterns: list[str],
        now: int,
        sort_mode: SortMode = SortMode.FRECENT,
    ) -> VisitRecord | None:
        """The single best match, or None."""
        records = self.store.load()
        result = query(
            records, patterns, sort_mode, now, want_list=False, match_mode=self.match_mode
        )
        if isinstance(result, list):
            result = result[0] if result else None
        log.debug("best_match", patterns=patterns, path=result.path if result else None)
        return result
