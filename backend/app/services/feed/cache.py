"""
Per-user feed cache: the last track list fetched from SoundCloud, one row per user.

Refresh is last-write-wins (the whole list is replaced, never merged). There is no TTL;
a row lives until the next write or an explicit clear. The Session is injected so callers
own its lifecycle (request scope, script, test).
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import EncodingError, StorageError
from app.models.cached_feed import CachedFeed
from app.services.feed.types import CachedFeedLookup, CacheStatus, Track

logger = logging.getLogger(__name__)


def _check_keys(value: Any, *, user_id: str | None = None) -> None:
    # json.dumps coerces int/float/bool/None keys to strings, which would not round-trip
    stack = [value]
    seen: set[int] = set()
    while stack:
        v = stack.pop()
        if isinstance(v, (Mapping, list, tuple)):
            if id(v) in seen:
                continue  # cycles are left for json.dumps to reject
            seen.add(id(v))
        if isinstance(v, Mapping):
            for k, child in v.items():
                if not isinstance(k, str):
                    raise EncodingError(f"track object key {k!r} is not a string", user_id=user_id)
                stack.append(child)
        elif isinstance(v, (list, tuple)):
            stack.extend(v)


def _track_items(tracks: Iterable[Mapping[str, Any]], *, user_id: str | None = None) -> list[dict[str, Any]]:
    if isinstance(tracks, (str, bytes, Mapping)):
        raise EncodingError("tracks must be a sequence of track objects", user_id=user_id)
    items: list[dict[str, Any]] = []
    for i, t in enumerate(tracks):
        if not isinstance(t, Mapping):
            raise EncodingError(f"track {i} is {type(t).__name__}, expected an object", user_id=user_id)
        _check_keys(t, user_id=user_id)
        items.append(dict(t))
    return items


def _dump(items: list[dict[str, Any]], *, user_id: str | None = None) -> str:
    try:
        return json.dumps(items, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingError(f"tracks not JSON serializable: {e}", user_id=user_id) from e


def encode_tracks(tracks: Iterable[Mapping[str, Any]], *, user_id: str | None = None) -> str:
    """
    Serialize tracks to a JSON array. Raises EncodingError on non-mapping items, non-string keys,
    non-JSON values (datetime, set, NaN) or nesting too deep to encode. Tuples are stored as arrays.
    """
    return _dump(_track_items(tracks, user_id=user_id), user_id=user_id)


def decode_tracks(blob: str | None, *, user_id: str | None = None) -> list[Track]:
    """Parse a stored blob back into tracks. Raises EncodingError unless it is a JSON array of objects."""
    if blob is None:
        raise EncodingError("cached feed has no tracks blob", user_id=user_id)
    try:
        data = json.loads(blob)
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingError(f"cached feed is not valid JSON: {e}", user_id=user_id) from e
    if not isinstance(data, list) or not all(isinstance(t, dict) for t in data):
        raise EncodingError("cached feed is not a JSON array of objects", user_id=user_id)
    return data


class FeedCacheService:
    """Read/replace the cached feed for a user."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def _row(self, user_id: str) -> CachedFeed | None:
        return self._db.query(CachedFeed).filter(CachedFeed.user_id == user_id).first()

    def lookup(self, user_id: str) -> CachedFeedLookup:
        """Return status (absent / empty / present / corrupt) plus tracks. Decode errors are not raised."""
        try:
            row = self._row(user_id)
        except SQLAlchemyError as e:
            self._db.rollback()
            raise StorageError(f"failed to read cached feed: {e}", user_id=user_id) from e
        if row is None:
            return CachedFeedLookup(CacheStatus.ABSENT)
        try:
            tracks = decode_tracks(row.tracks, user_id=user_id)
        except EncodingError as e:
            logger.warning("Cached feed for user %s is unreadable, treating as cold: %s", user_id, e)
            return CachedFeedLookup(CacheStatus.CORRUPT, updated_at=row.updated_at)
        status = CacheStatus.PRESENT if tracks else CacheStatus.EMPTY
        return CachedFeedLookup(status, tracks, row.updated_at)

    def get_cached_feed(self, user_id: str) -> list[Track]:
        """
        Cached tracks for user_id, or [] when nothing usable is cached.
        [] covers "never cached", "cached empty" and "blob failed to decode"; use lookup() to tell them apart.
        """
        return self.lookup(user_id).tracks

    def cache_feed(self, user_id: str, tracks: Iterable[Mapping[str, Any]]) -> CachedFeed:
        """
        Replace the cached feed for user_id (insert on first write).
        Raises EncodingError before touching the DB if tracks can't be serialized;
        StorageError if the write or commit fails (session is rolled back).
        """
        items = _track_items(tracks, user_id=user_id)
        payload = _dump(items, user_id=user_id)
        now = datetime.now(timezone.utc)
        try:
            row = self._row(user_id)
            if row:
                row.tracks = payload
                row.updated_at = now
            else:
                row = CachedFeed(user_id=user_id, tracks=payload, updated_at=now)
                self._db.add(row)
            self._db.commit()
            self._db.refresh(row)
        except SQLAlchemyError as e:
            self._db.rollback()
            raise StorageError(f"failed to write cached feed: {e}", user_id=user_id) from e
        logger.debug("Cached feed for user %s (%d tracks)", user_id, len(items))
        return row

    def clear_cached_feed(self, user_id: str) -> bool:
        """Delete the cached feed for user_id. Returns True if a row was removed."""
        try:
            deleted = self._db.query(CachedFeed).filter(CachedFeed.user_id == user_id).delete(
                synchronize_session=False
            )
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise StorageError(f"failed to clear cached feed: {e}", user_id=user_id) from e
        if deleted:
            logger.info("Cleared cached feed for user %s", user_id)
        return bool(deleted)
