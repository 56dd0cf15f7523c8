"""
Feed: per-user cache of the SoundCloud track list plus criteria-based filtering.

- cached_feeds: one row per user, JSON blob of tracks, replaced on every write.
- filter_tracks: pure, stable, fail-closed filter (length range, genres, title query).
- load_user_feed / filter_user_feed: cache-first orchestration used by callers.
"""

from app.services.feed.cache import FeedCacheService, decode_tracks, encode_tracks
from app.services.feed.filter import filter_tracks, matches_criteria
from app.services.feed.service import FeedResult, filter_user_feed, load_user_feed
from app.services.feed.types import CachedFeedLookup, CacheStatus, FilterCriteria, Track

__all__ = [
    "CachedFeedLookup",
    "CacheStatus",
    "FeedCacheService",
    "FeedResult",
    "FilterCriteria",
    "Track",
    "decode_tracks",
    "encode_tracks",
    "filter_tracks",
    "filter_user_feed",
    "load_user_feed",
    "matches_criteria",
]
