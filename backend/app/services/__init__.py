from app.services.feed import FeedCacheService, filter_tracks, filter_user_feed, load_user_feed
from app.services.soundcloud import SoundcloudClient

__all__ = ["FeedCacheService", "filter_tracks", "filter_user_feed", "load_user_feed", "SoundcloudClient"]
