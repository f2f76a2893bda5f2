import pytest
from fastapi.testclient import TestClient

from notary.app.core.config import Settings
from notary.app.main import create_app
from notary.app.store.record_store import RecordStore
from notary.tests.fakes import FakeDigest


@pytest.fixture
def fake_digest() -> FakeDigest:
    return FakeDigest()


@pytest.fixture
def store() -> RecordStore:
    return RecordStore()


@pytest.fixture
def settings() -> Settings:
    return Settings(hasher_service_url="http://hasher.test/hash")


@pytest.fixture
def client(settings, fake_digest, store):
    app = create_app(settings=settings, digest_function=fake_digest, store=store)
    with TestClient(app) as test_client:
        yield test_client
