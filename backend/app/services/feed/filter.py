"""
Track filter: stable, conjunctive filtering of a feed against FilterCriteria.

Every check fails closed: a track missing the field a criterion needs (or carrying it
with the wrong type) does not match, and never makes the whole call fail.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from app.core.constants import TRACK_GENRE, TRACK_LENGTH, TRACK_TITLE
from app.services.feed.types import FilterCriteria, Track


def _length(track: Mapping[str, Any]) -> float | None:
    value = track.get(TRACK_LENGTH)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _text(track: Mapping[str, Any], key: str) -> str | None:
    value = track.get(key)
    return value if isinstance(value, str) else None


def matches_criteria(track: Any, criteria: FilterCriteria) -> bool:
    """True if track satisfies every criterion that is set."""
    if criteria.is_empty():
        return True
    if not isinstance(track, Mapping):
        return False

    if criteria.min_length is not None or criteria.max_length is not None:
        length = _length(track)
        if length is None:
            return False
        if criteria.min_length is not None and length < criteria.min_length:
            return False
        if criteria.max_length is not None and length > criteria.max_length:
            return False

    if criteria.genres is not None:
        genre = _text(track, TRACK_GENRE)
        if genre is None or genre not in criteria.genres:
            return False

    if criteria.query is not None:
        title = _text(track, TRACK_TITLE)
        if title is None:
            return False
        if criteria.case_sensitive:
            if criteria.query not in title:
                return False
        elif criteria.query.casefold() not in title.casefold():
            return False

    return True


def filter_tracks(
    tracks: Sequence[Track],
    criteria: FilterCriteria | Mapping[str, Any] | None,
) -> list[Track]:
    """
    Return the tracks matching all criteria, in input order.

    criteria may be a FilterCriteria or a mapping with min_length, max_length, genres,
    query and case_sensitive (default True). An empty mapping returns every track.
    Raises ValueError for malformed criteria values (caller error), never for bad tracks.
    """
    if not isinstance(criteria, FilterCriteria):
        criteria = FilterCriteria.from_mapping(criteria)
    if criteria.is_empty():
        return list(tracks)
    return [t for t in tracks if matches_criteria(t, criteria)]
