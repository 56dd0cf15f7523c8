from app.models.cached_feed import CachedFeed
from app.models.user import User

__all__ = [
    "CachedFeed",
    "User",
]
