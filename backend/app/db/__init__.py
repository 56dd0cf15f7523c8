from app.db.base import Base
from app.db.session import SessionLocal, engine, get_db, init_db, make_engine, make_sessionmaker
from app.db.tables import ALL_TABLE_NAMES, FEED_CACHE_TABLE_NAMES

__all__ = [
    "get_db",
    "engine",
    "SessionLocal",
    "Base",
    "init_db",
    "make_engine",
    "make_sessionmaker",
    "ALL_TABLE_NAMES",
    "FEED_CACHE_TABLE_NAMES",
]
