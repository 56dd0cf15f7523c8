"""
Centralized constants for the feed cache, track filter and SoundCloud client.

Change criteria keys or API paths here instead of scattering literals across services.
"""

# Filter criteria keys accepted by filter_tracks / FilterCriteria.from_mapping
CRITERIA_MIN_LENGTH = "min_length"
CRITERIA_MAX_LENGTH = "max_length"
CRITERIA_GENRES = "genres"
CRITERIA_QUERY = "query"
CRITERIA_CASE_SENSITIVE = "case_sensitive"

# Track keys the filter reads; everything else passes through untouched
TRACK_TITLE = "title"
TRACK_LENGTH = "length"
TRACK_GENRE = "genre"

# SoundCloud API
SOUNDCLOUD_DEFAULT_BASE_URL = "https://api.soundcloud.com"
SOUNDCLOUD_USER_TRACKS_PATH = "/me/tracks"
SOUNDCLOUD_DEFAULT_TIMEOUT_SECONDS = 10.0

# Log line format shared by console and file handlers
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
