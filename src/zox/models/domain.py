"""Domain models for visit records and lookup modes."""

import math
from enum import Enum

from pydantic import BaseModel, field_validator


class SortMode(str, Enum):
    """What a query orders its matches by."""

    FRECENT = "frecent"
    RANK = "rank"
    TIME = "time"


class MatchMode(str, Enum):
    """How query fragments are matched against a path."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


class VisitRecord(BaseModel):
    """A tracked directory with its accumulated rank and last visit time."""

    path: str
    rank: float
    time: int

    @field_validator("path")
    @classmethod
    def path_must_not_be_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("path must not be empty")
        return v

    @field_validator("rank")
    @classmethod
    def rank_must_be_non_negative(cls, v: float) -> float:
        if not math.isfinite(v) or v < 0:
            raise ValueError("rank must be a finite number >= 0")
        return v

    @field_validator("time")
    @classmethod
    def time_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("time must be >= 0")
        return v
