"""SoundCloud API config. Base URL and timeout from settings (.env) or SoundcloudConfig args."""
from app.config import settings
from app.core.constants import SOUNDCLOUD_DEFAULT_BASE_URL, SOUNDCLOUD_DEFAULT_TIMEOUT_SECONDS


class SoundcloudConfig:
    """Base URL and request timeout for the SoundCloud API."""

    __slots__ = ("base_url", "timeout")

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.soundcloud_api_base_url or SOUNDCLOUD_DEFAULT_BASE_URL).rstrip("/")
        if timeout is None:
            timeout = settings.soundcloud_timeout_seconds or SOUNDCLOUD_DEFAULT_TIMEOUT_SECONDS
        self.timeout = float(timeout)

    def headers(self, access_token: str) -> dict[str, str]:
        return {
            "Authorization": f"OAuth {access_token}",
            "Accept": "application/json; charset=utf-8",
        }
