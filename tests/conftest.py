"""
Test configuration and fixtures for the FastAPI shortlink service.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient

from shortlink_app.app_factory import create_app
from shortlink_app.config import Settings
from shortlink_app.persistence.strategies import FilePersistence
from shortlink_app.services.short_code_strategies import ShortCodeStrategy, Sha3ShortCodeStrategy
from shortlink_app.services.url_service import URLService
from shortlink_app.store.url_store import URLStore, CollisionPolicy


class FixedShortCodeStrategy(ShortCodeStrategy):
    """Derives the same code for every URL, to force collisions"""

    def _digest(self, data: bytes) -> bytes:
        return bytes(32)


@pytest.fixture
def storage_path(tmp_path):
    """Path of the flat file used by the test app"""
    return tmp_path / "shortened_urls.txt"


@pytest.fixture
def settings(storage_path):
    """
    Settings pointing persistence at a per-test file.
    The .env file is ignored so local configuration cannot leak in.
    """
    return Settings(
        _env_file=None,
        persistence_backend="file",
        storage_file_path=str(storage_path),
        collision_policy="overwrite",
    )


@pytest.fixture
def store():
    """An empty store using the default SHA3-256 derivation"""
    return URLStore(Sha3ShortCodeStrategy())


@pytest.fixture
def url_service(store, storage_path):
    """URL service over the store, saving to the per-test file"""
    return URLService(store, FilePersistence(str(storage_path)))


@pytest.fixture
def app(settings):
    """A fresh application (and so a fresh store) for each test"""
    return create_app(settings)


@pytest.fixture
def client(app):
    """
    Create a test client for the per-test app.
    This is the main fixture that API tests will use.
    """
    with TestClient(app) as test_client:
        yield test_client
@pytest.fixture
def colliding_store():
    """A store where every URL maps to the same code, with collisions rejected"""
    return URLStore(FixedShortCodeStrategy(), collision_policy=CollisionPolicy.REJECT)
