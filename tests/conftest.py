"""Pytest configuration and fixtures."""

import io
import os
from datetime import datetime, timedelta, timezone

# keep the module-level app quiet and off the filesystem
os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.core.config import Settings
from app.core.exceptions import StorageError
from app.db.session import Database
from app.main import create_app
from app.models.event import Event
from app.models.enums import AdminRole
from app.services.auth_service import AuthService
from app.utils.cloudinary_utils import StoredAsset

TEST_DATABASE_URL = "sqlite://"
ADMIN_PASSWORD = "admin123"


class FakeAssetStore:
    """Records every upload/delete instead of talking to Cloudinary."""

    def __init__(self):
        self.uploads = []
        self.deleted = []
        self.fail_upload = False
        self.fail_delete = False
        self._counter = 0

    def upload(self, image_bytes: bytes, filename: str | None = None) -> StoredAsset:
        if self.fail_upload:
            raise StorageError("Failed to upload image")
        self._counter += 1
        public_id = f"events/test-{self._counter}"
        self.uploads.append(public_id)
        return StoredAsset(url=f"https://res.cloudinary.test/{public_id}.jpg", public_id=public_id)

    def delete(self, public_id: str) -> bool:
        self.deleted.append(public_id)
        return not self.fail_delete


@pytest.fixture
def settings() -> Settings:
    return Settings(
        app_env="test",
        database_url=TEST_DATABASE_URL,
        jwt_secret="test-secret",
        log_dir="",
        log_level="WARNING",
    )


@pytest.fixture
def database():
    db = Database(TEST_DATABASE_URL)
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def asset_store() -> FakeAssetStore:
    return FakeAssetStore()


@pytest.fixture
def app(settings, database, asset_store):
    return create_app(settings=settings, database=database, asset_store=asset_store)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_service(db_session, settings) -> AuthService:
    return AuthService(db_session, settings)


@pytest.fixture
def admin(auth_service):
    return auth_service.register("admin", "admin@example.com", ADMIN_PASSWORD, AdminRole.SUPERADMIN)


@pytest.fixture
def auth_headers(admin, auth_service) -> dict:
    return {"Authorization": f"Bearer {auth_service.issue_token(admin)}"}


@pytest.fixture
def jpeg_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 30, 30)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGBA", (8, 8), color=(0, 120, 200, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_event(db_session):
    """Insert an event row directly, bypassing the asset store."""
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(**overrides) -> Event:
        counter["n"] += 1
        n = counter["n"]
        fields = dict(
            title=f"Event {n}",
            description=f"Description {n}",
            category="health",
            date=base + timedelta(days=n),
            featured=False,
            order=0,
            is_active=True,
            image_url=f"https://res.cloudinary.test/events/seed-{n}.jpg",
            image_public_id=f"events/seed-{n}",
            created_at=base + timedelta(minutes=n),
        )
        fields.update(overrides)
        event = Event(**fields)
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make
