"""
Typed definitions for feed tracks, filter criteria and cache lookups.

Tracks come from SoundCloud as arbitrary JSON objects. We only read title, length and
genre; every other key is passed through untouched, so Track is a partial TypedDict and
all functions accept any Mapping.
"""
from __future__ import annotations

import math
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping, TypedDict

from app.core.constants import (
    CRITERIA_CASE_SENSITIVE,
    CRITERIA_GENRES,
    CRITERIA_MAX_LENGTH,
    CRITERIA_MIN_LENGTH,
    CRITERIA_QUERY,
)


class Track(TypedDict, total=False):
    """One feed item. Provider keys beyond these (permalink_url, user, ...) are kept as-is."""
    id: int | str
    title: str
    length: int  # seconds
    genre: str
    duration: int  # milliseconds, as sent by SoundCloud


def _parse_length(key: str, value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            raise ValueError(f"{key} must be a number, got {value!r}") from None
    elif isinstance(value, float):
        parsed = value
    else:
        raise ValueError(f"{key} must be a number, got {type(value).__name__}")
    # bounds must be finite; NaN compares false against every length
    if not math.isfinite(parsed):
        raise ValueError(f"{key} must be finite, got {value!r}")
    return parsed


def _parse_genres(value: Any) -> frozenset[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return frozenset([value])
    if isinstance(value, (list, tuple, set, frozenset)):
        if not all(isinstance(g, str) for g in value):
            raise ValueError("genres must contain only strings")
        return frozenset(value)
    raise ValueError(f"genres must be a list of strings, got {type(value).__name__}")


class FilterCriteria:
    """Optional predicates for filter_tracks. None means "no constraint"."""

    __slots__ = ("min_length", "max_length", "genres", "query", "case_sensitive")

    def __init__(
        self,
        *,
        min_length: float | None = None,
        max_length: float | None = None,
        genres: Iterable[str] | None = None,
        query: str | None = None,
        case_sensitive: bool = True,
    ) -> None:
        self.min_length = min_length
        self.max_length = max_length
        self.genres = frozenset(genres) if genres is not None else None
        self.query = query
        self.case_sensitive = case_sensitive

    @classmethod
    def from_mapping(cls, criteria: Mapping[str, Any] | None) -> "FilterCriteria":
        """Build from a request-style mapping. Unknown keys are ignored; bad values raise ValueError."""
        criteria = criteria or {}
        query = criteria.get(CRITERIA_QUERY)
        if query is not None and not isinstance(query, str):
            raise ValueError(f"query must be a string, got {type(query).__name__}")
        case_sensitive = criteria.get(CRITERIA_CASE_SENSITIVE, True)
        if case_sensitive is None:
            case_sensitive = True
        if not isinstance(case_sensitive, bool):
            raise ValueError("case_sensitive must be a bool")
        return cls(
            min_length=_parse_length(CRITERIA_MIN_LENGTH, criteria.get(CRITERIA_MIN_LENGTH)),
            max_length=_parse_length(CRITERIA_MAX_LENGTH, criteria.get(CRITERIA_MAX_LENGTH)),
            genres=_parse_genres(criteria.get(CRITERIA_GENRES)),
            query=query,
            case_sensitive=case_sensitive,
        )

    def is_empty(self) -> bool:
        return (
            self.min_length is None
            and self.max_length is None
            and self.genres is None
            and self.query is None
        )

    def to_dict(self) -> dict[str, Any]:
        """Only the criteria that are set (for logging / echoing back to callers)."""
        out: dict[str, Any] = {}
        if self.min_length is not None:
            out[CRITERIA_MIN_LENGTH] = self.min_length
        if self.max_length is not None:
            out[CRITERIA_MAX_LENGTH] = self.max_length
        if self.genres is not None:
            out[CRITERIA_GENRES] = sorted(self.genres)
        if self.query is not None:
            out[CRITERIA_QUERY] = self.query
            out[CRITERIA_CASE_SENSITIVE] = self.case_sensitive
        return out

    def __repr__(self) -> str:
        return f"FilterCriteria({self.to_dict()!r})"


class CacheStatus(str, Enum):
    ABSENT = "absent"  # no row for the user
    EMPTY = "empty"  # row holds []
    PRESENT = "present"  # row holds at least one track
    CORRUPT = "corrupt"  # row exists but the blob does not decode to a list of objects


class CachedFeedLookup:
    """Result of FeedCacheService.lookup: distinguishes cold, empty and corrupt caches."""

    __slots__ = ("status", "tracks", "updated_at")

    def __init__(
        self,
        status: CacheStatus,
        tracks: list[Track] | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        self.status = status
        self.tracks = tracks if tracks is not None else []
        self.updated_at = updated_at

    @property
    def usable(self) -> bool:
        """True when there are tracks to serve (what get_cached_feed callers check via non-empty)."""
        return self.status is CacheStatus.PRESENT

    def __repr__(self) -> str:
        return f"CachedFeedLookup(status={self.status.value}, tracks={len(self.tracks)})"
