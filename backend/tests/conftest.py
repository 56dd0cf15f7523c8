import os

# Must be set before app.config is imported (settings and the module-level engine read them)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_ENV", "test")

import pytest

from app.db.session import init_db, make_engine, make_sessionmaker
from app.models.user import User


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'feed.db'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = make_sessionmaker(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(email: str | None = None) -> User:
        counter["n"] += 1
        user = User(email=email or f"listener{counter['n']}@example.com")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def tracks():
    return [
        {"id": 1, "title": "Love Will Tear Us Apart", "length": 205, "genre": "rock"},
        {"id": 2, "title": "Lovely Day (Extended Mix)", "length": 4000, "genre": "electronic"},
        {"id": 3, "title": "Boiler Room Set", "length": 3600, "genre": "electronic"},
        {"id": 4, "title": "field recording", "length": 3000, "genre": "ambient", "permalink_url": "https://soundcloud.com/x/y"},
    ]
