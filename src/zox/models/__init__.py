"""Domain models."""

from zox.models.domain import MatchMode, SortMode, VisitRecord

__all__ = [
    "MatchMode",
    "SortMode",
    "VisitRecord",
]
