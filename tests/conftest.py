import os

# Settings are read at import time; point them at an in-memory database first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_AUTO_MIGRATE"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

import songs.models  # noqa: E402,F401
from songs.database import Base, SessionLocal, engine  # noqa: E402
from songs.main import app  # noqa: E402
from songs.models.song import Song  # noqa: E402

LYRICS = "Verse one\\nVerse two\\nVerse three\\nVerse four\\nVerse five\\nVerse six"


@pytest.fixture(autouse=True)
def database():
    """Create all tables before each test, drop them after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_song():
    """Insert and commit a song, returning its id."""

    def _make_song(
        group="Muse",
        song="Uprising",
        text=LYRICS,
        release_date="07.09.2009",
        link="https://example.com/uprising",
    ):
        db = SessionLocal()
        try:
            record = Song(
                group_name=group,
                song_name=song,
                text=text,
                release_date=release_date,
                link=link,
            )
            db.add(record)
            db.commit()
            return record.id
        finally:
            db.close()

    return _make_song
