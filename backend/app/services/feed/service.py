"""
Feed orchestration: cache first, fetch on miss, cache the fresh list, filter on request.

This is the glue a request handler runs. The cache and the filter never call each other;
only these functions compose them.
"""
import logging
from typing import Any, Callable, Mapping, Sequence

from sqlalchemy.orm import Session

from app.core.errors import EncodingError, StorageError
from app.services.feed.cache import FeedCacheService
from app.services.feed.filter import filter_tracks
from app.services.feed.types import FilterCriteria, Track

logger = logging.getLogger(__name__)

SOURCE_CACHE = "cache"
SOURCE_FRESH = "fresh"


class FeedResult:
    """Tracks for the user plus where they came from and whether they were cached."""

    __slots__ = ("tracks", "source", "cached")

    def __init__(self, tracks: list[Track], *, source: str, cached: bool) -> None:
        self.tracks = tracks
        self.source = source
        self.cached = cached

    def to_dict(self) -> dict[str, Any]:
        return {"tracks": self.tracks, "source": self.source, "cached": self.cached, "count": len(self.tracks)}


def load_user_feed(
    db: Session,
    user_id: str,
    fetch_tracks: Callable[[], Sequence[Track]],
) -> FeedResult:
    """
    Return the user's feed: cached tracks if any, else fetch_tracks() and cache the result.

    A cache read error is logged and treated as a miss. A cache write error (encoding or storage)
    is logged and the fresh tracks are still returned. Errors from fetch_tracks propagate.
    """
    cache = FeedCacheService(db)
    try:
        cached = cache.get_cached_feed(user_id)
    except StorageError as e:
        logger.error("Error getting cached feed for user %s: %s", user_id, e)
        cached = []
    if cached:
        logger.info("Using cached feed for user %s (%d tracks)", user_id, len(cached))
        return FeedResult(cached, source=SOURCE_CACHE, cached=True)

    tracks = list(fetch_tracks())
    stored = False
    try:
        cache.cache_feed(user_id, tracks)
        stored = True
    except (EncodingError, StorageError) as e:
        logger.error("Error caching feed for user %s: %s", user_id, e)
    logger.info("Fetched fresh feed for user %s (%d tracks)", user_id, len(tracks))
    return FeedResult(tracks, source=SOURCE_FRESH, cached=stored)


def filter_user_feed(
    db: Session,
    user_id: str,
    criteria: FilterCriteria | Mapping[str, Any] | None,
) -> list[Track] | None:
    """
    Filter the user's cached feed. Returns None when nothing usable is cached (load the feed first).
    Raises ValueError for malformed criteria and StorageError if the cache can't be read.
    """
    if not isinstance(criteria, FilterCriteria):
        criteria = FilterCriteria.from_mapping(criteria)
    tracks = FeedCacheService(db).get_cached_feed(user_id)
    if not tracks:
        logger.debug("No cached feed to filter for user %s", user_id)
        return None
    filtered = filter_tracks(tracks, criteria)
    logger.info(
        "Feed filtered for user %s: %d -> %d tracks %s",
        user_id,
        len(tracks),
        len(filtered),
        criteria.to_dict(),
    )
    return filtered
