"""Shared test fixtures for the gallery backend test suite.

Every test gets a fresh in-memory SQLite database and a recording stand-in
for blob storage, so no files are written and storage failures can be
simulated. bcrypt runs at its minimum cost factor to keep tests fast.
"""

import os

os.environ["LOG_FORMAT"] = "text"

import itertools
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from giftgallery.core.config import Settings
from giftgallery.core.result import Err, Ok, Result
from giftgallery.database import Database
from giftgallery.exceptions import StorageCleanupError
from giftgallery.main import create_app
from giftgallery.models.user import User
from giftgallery.services.credential_store import CredentialStore
from giftgallery.services.folder_service import FolderService
from giftgallery.services.photo_service import PhotoService

TEST_JWT_SECRET = "test-secret-key"


class RecordingStorage:
    """Blob storage stand-in that keeps objects in memory and records removals.

    Set ``fail_removals = True`` to make every removal return an error, or
    ``raise_on_remove = True`` to make it raise.
    """

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.removed: list[str] = []
        self.fail_removals = False
        self.raise_on_remove = False
        self._ids = itertools.count(1)

    def put_object(self, data: bytes, filename: str) -> str:
        ext = os.path.splitext(filename)[1].lower()
        path = f"/uploads/{next(self._ids)}{ext}"
        self.objects[path] = data
        return path

    def remove_object(self, path: str) -> Result[None]:
        self.removed.append(path)
        if self.raise_on_remove:
            raise RuntimeError("storage backend exploded")
        if self.fail_removals or path not in self.objects:
            return Err(StorageCleanupError(path))
        del self.objects[path]
        return Ok()


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        database_url="sqlite://",
        upload_dir=str(tmp_path / "uploads"),
        bcrypt_rounds=4,
        jwt_secret_key=TEST_JWT_SECRET,
        log_format="text",
        log_level="WARNING",
        audit_retention_days=0,
        max_upload_bytes=1024,
    )


@pytest.fixture()
def database():
    handle = Database("sqlite://")
    handle.create_all()
    yield handle
    handle.dispose()


@pytest.fixture()
def db(database) -> Session:
    """Per-test database session."""
    session = database.session()
    yield session
    session.close()


@pytest.fixture()
def credentials() -> CredentialStore:
    return CredentialStore(rounds=4)


@pytest.fixture()
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture()
def folder_service(db, credentials, storage) -> FolderService:
    return FolderService(db, credentials, storage)


@pytest.fixture()
def photo_service(db, storage) -> PhotoService:
    return PhotoService(db, storage, max_upload_bytes=1024)


@pytest.fixture()
def make_user(db, credentials) -> Callable[..., User]:
    """Factory inserting a user row directly."""
    counter = itertools.count(1)

    def _make(user_id: str = None, email: str = None, is_active: bool = True) -> User:
        n = next(counter)
        user = User(
            user_id=user_id or f"user-{n}",
            display_name=f"User {n}",
            email=email or f"user{n}@example.com",
            password_hash=credentials.hash("password123").unwrap(),
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture()
def app(settings, storage):
    application = create_app(settings)
    application.state.storage = storage
    return application


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def login(client) -> Callable[[str], dict]:
    """Register an account (once per email) and return its bearer headers."""

    def _login(email: str, password: str = "password123") -> dict:
        client.post("/api/auth/register", json={
            "email": email,
            "password": password,
            "display_name": email.split("@")[0],
        })
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['data']['token']}"}

    return _login


@pytest.fixture()
def alice(login) -> dict:
    return login("alice@example.com")


@pytest.fixture()
def bob(login) -> dict:
    return login("bob@example.com")
