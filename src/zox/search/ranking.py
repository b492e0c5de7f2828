"""Frecency scoring and descending ordering of visit records."""

from collections.abc import Callable, Iterable
from functools import cmp_to_key

from zox.models import SortMode, VisitRecord

# Time constants
ONE_HOUR_SECONDS = 60 * 60
ONE_DAY_SECONDS = 24 * ONE_HOUR_SECONDS
ONE_WEEK_SECONDS = 7 * ONE_DAY_SECONDS


def record_age(record: VisitRecord, now: int) -> int:
    """Seconds since the record was last visited, clamped at zero.

    Timestamps ahead of ``now`` (clock skew, hand-edited files) count as
    just visited.
    """
    return max(0, now - record.time)


def frecency(record: VisitRecord, now: int) -> float:
    """Calculate the recency-weighted rank of a record.

    Step decay by age bucket:
    - under an hour: rank x 4
    - under a day: rank x 2
    - under a week: rank / 2
    - older: rank / 4

    Args:
        record: The visit record to score.
        now: Current Unix time in seconds.

    Returns:
        The frecency score.
    """
    age = record_age(record, now)
    if age < ONE_HOUR_SECONDS:
        return record.rank * 4.0
    if age < ONE_DAY_SECONDS:
        return record.rank * 2.0
    if age < ONE_WEEK_SECONDS:
        return record.rank / 2.0
    return record.rank / 4.0


def sort_key(record: VisitRecord, sort_mode: SortMode, now: int) -> float:
    """Score a record for ordering under the given sort mode."""
    if sort_mode == SortMode.RANK:
        return record.rank
    if sort_mode == SortMode.TIME:
        return float(record.time)
    return frecency(record, now)


def compare_descending(a: float, b: float) -> int:
    """Three-way comparison placing the larger score first.

    Incomparable values (NaN) compare equal so the ordering stays total.
    """
    if a > b:
        return -1
    if a < b:
        return 1
    return 0


def sort_descending(
    records: Iterable[VisitRecord],
    key: Callable[[VisitRecord], float],
) -> list[VisitRecord]:
    """Sort records by score, highest first.

    Ties keep their original relative order.

    Args:
        records: Records to sort.
        key: Function returning the score of a record.

    Returns:
        A new sorted list.
    """
    scored = [(key(record), record) for record in records]
    scored.sort(key=cmp_to_key(lambda x, y: compare_descending(x[0], y[0])))
    return [record for _, record in scored]
