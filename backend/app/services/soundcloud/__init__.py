"""SoundCloud API: the upstream source of feed tracks (fetched only on a cache miss)."""
from app.services.soundcloud.client import SoundcloudClient, normalize_track
from app.services.soundcloud.config import SoundcloudConfig

__all__ = [
    "SoundcloudClient",
    "SoundcloudConfig",
    "normalize_track",
]
