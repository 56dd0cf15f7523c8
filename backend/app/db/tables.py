"""
Single source of truth for database table names.

Use these names when writing raw SQL (e.g. TRUNCATE in debug scripts).
"""
# All tables that exist in the DB. Must match app.models.
ALL_TABLE_NAMES = (
    "users",
    "cached_feeds",
)

# Tables cleared when resetting feed cache state. Users are kept.
FEED_CACHE_TABLE_NAMES = ("cached_feeds",)
