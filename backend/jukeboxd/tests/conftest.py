"""
Shared fixtures: an in-memory document store and a profile picture directory.
"""
import mongomock
import pytest
from fastapi.testclient import TestClient
from jukeboxd.core.config import settings
from jukeboxd.db.session import get_db, init_db
from jukeboxd.main import app

PICTURES = ["cassette.png", "headphones.png", "vinyl.png"]
PASSWORD = "Sup3r$ecret"


@pytest.fixture
def db():
    database = mongomock.MongoClient()["jukeboxd_test"]
    init_db(database)
    return database


@pytest.fixture(autouse=True)
def test_settings(monkeypatch, tmp_path):
    """Cheap bcrypt rounds and a temporary set of profile pictures."""
    photos = tmp_path / "photos"
    photos.mkdir()
    for name in PICTURES:
        (photos / name).write_bytes(b"")
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)
    monkeypatch.setattr(settings, "PROFILE_PICTURE_DIR", str(photos))
    return settings


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Create users through the account store with sensible defaults."""
    from jukeboxd.services import user_service

    def _make(username="Alice", email=None, password=PASSWORD, bio="I like records",
              profile_picture="vinyl.png"):
        email = email or f"{username.lower()}@example.com"
        return user_service.create_user(username, email, password, bio, profile_picture, db)

    return _make
