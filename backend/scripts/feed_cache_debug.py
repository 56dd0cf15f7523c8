#!/usr/bin/env python3
"""
Inspect or reset a user's cached feed, or try filter criteria against it.

Usage (from backend/):
  poetry run python scripts/feed_cache_debug.py show <user_id>
  poetry run python scripts/feed_cache_debug.py clear <user_id>
  poetry run python scripts/feed_cache_debug.py filter <user_id> --min-length 3600 --genre electronic --query Love [--ignore-case]
"""
import argparse
import json
import sys
from pathlib import Path

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from app.config import settings
from app.core.logging import configure_logging
from app.db.session import SessionLocal
from app.services.feed import FeedCacheService, filter_user_feed


def _print_tracks(tracks):
    for t in tracks:
        title = str(t.get("title") or "?")[:60]
        length = t.get("length")
        genre = str(t.get("genre") or "—")
        print(f"  - {title}  [{genre}]  {length if length is not None else '—'}s")


def _show(db, args) -> int:
    lookup = FeedCacheService(db).lookup(args.user_id)
    print(f"User:       {args.user_id}")
    print(f"Status:     {lookup.status.value}")
    print(f"Updated at: {lookup.updated_at.isoformat() if lookup.updated_at else 'never'}")
    print(f"Tracks:     {len(lookup.tracks)}")
    if args.json:
        print(json.dumps(lookup.tracks, indent=2))
    else:
        _print_tracks(lookup.tracks)
    return 0


def _clear(db, args) -> int:
    removed = FeedCacheService(db).clear_cached_feed(args.user_id)
    print("Cleared." if removed else "Nothing cached for this user.")
    return 0


def _filter(db, args) -> int:
    criteria = {
        "min_length": args.min_length,
        "max_length": args.max_length,
        "genres": args.genre,
        "query": args.query,
        "case_sensitive": not args.ignore_case,
    }
    filtered = filter_user_feed(db, args.user_id, criteria)
    if filtered is None:
        print("No cached feed for this user; load the feed first.")
        return 1
    print(f"{len(filtered)} matching tracks")
    _print_tracks(filtered)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Cached feed debug")
    sub = parser.add_subparsers(dest="command", required=True)

    p_show = sub.add_parser("show", help="Show cache status and tracks")
    p_show.add_argument("user_id")
    p_show.add_argument("--json", action="store_true", help="Dump raw tracks as JSON")
    p_show.set_defaults(func=_show)

    p_clear = sub.add_parser("clear", help="Delete the cached feed")
    p_clear.add_argument("user_id")
    p_clear.set_defaults(func=_clear)

    p_filter = sub.add_parser("filter", help="Filter the cached feed")
    p_filter.add_argument("user_id")
    p_filter.add_argument("--min-length", type=float, default=None, help="Minimum length in seconds")
    p_filter.add_argument("--max-length", type=float, default=None, help="Maximum length in seconds")
    p_filter.add_argument("--genre", action="append", default=None, help="Allowed genre (repeatable)")
    p_filter.add_argument("--query", default=None, help="Title substring")
    p_filter.add_argument("--ignore-case", action="store_true", help="Case-insensitive title match")
    p_filter.set_defaults(func=_filter)

    args = parser.parse_args()
    configure_logging(settings)
    db = SessionLocal()
    try:
        return args.func(db, args)
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
