"""SoundCloud API client: lowest level, sends the request and checks the response shape."""
import logging
from typing import Any

import httpx

from app.core.constants import SOUNDCLOUD_USER_TRACKS_PATH
from app.core.errors import SoundcloudError
from app.services.soundcloud.config import SoundcloudConfig

logger = logging.getLogger(__name__)


def normalize_track(raw: dict[str, Any]) -> dict[str, Any]:
    """Copy of raw with length (seconds) filled from duration (ms) when SoundCloud omits it."""
    track = dict(raw)
    if "length" not in track:
        duration = track.get("duration")
        if isinstance(duration, (int, float)) and not isinstance(duration, bool):
            track["length"] = int(duration) // 1000
    return track


class SoundcloudClient:
    """Fetch a user's tracks with their OAuth access token."""

    def __init__(
        self,
        config: SoundcloudConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or SoundcloudConfig()
        self._transport = transport

    def _get(self, path: str, access_token: str) -> Any:
        url = f"{self._config.base_url}{path}"
        try:
            with httpx.Client(timeout=self._config.timeout, transport=self._transport) as c:
                r = c.get(url, headers=self._config.headers(access_token))
        except httpx.HTTPError as e:
            raise SoundcloudError(f"SoundCloud request failed: {e}") from e
        if not r.is_success:
            logger.warning("SoundCloud %s returned %s: %s", path, r.status_code, r.text[:500] if r.text else "")
            raise SoundcloudError(f"SoundCloud API error: {r.status_code}", status_code=r.status_code)
        try:
            return r.json()
        except ValueError as e:
            raise SoundcloudError("SoundCloud returned a non-JSON body", status_code=r.status_code) from e

    def fetch_user_feed(self, access_token: str) -> list[dict[str, Any]]:
        """GET /me/tracks. Returns normalized tracks; raises SoundcloudError on any failure."""
        if not access_token:
            raise SoundcloudError("SoundCloud access token required")
        body = self._get(SOUNDCLOUD_USER_TRACKS_PATH, access_token)
        # Linked-partitioning responses wrap the list: {"collection": [...], "next_href": ...}
        if isinstance(body, dict) and isinstance(body.get("collection"), list):
            body = body["collection"]
        if not isinstance(body, list):
            raise SoundcloudError("SoundCloud tracks response is not a list")
        return [normalize_track(t) for t in body if isinstance(t, dict)]
