"""
Error taxonomy for the feed cache, track blob encoding and the SoundCloud fetch.

Callers catch FeedError for "anything this backend raised"; the subclasses say which
collaborator failed so the orchestrator can decide whether the request can still proceed.
"""
from __future__ import annotations


class FeedError(Exception):
    """Base class for feed backend failures."""

    def __init__(self, message: str, *, user_id: str | None = None) -> None:
        super().__init__(message)
        self.user_id = user_id


class StorageError(FeedError):
    """Reading or writing the cached_feeds table failed (connection, constraint, commit)."""


class EncodingError(FeedError):
    """Track sequence could not be serialized to (or decoded from) the JSON blob."""


class SoundcloudError(FeedError):
    """Upstream SoundCloud request failed or returned an unusable body."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        user_id: str | None = None,
    ) -> None:
        super().__init__(message, user_id=user_id)
        self.status_code = status_code
