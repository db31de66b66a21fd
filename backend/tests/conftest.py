# tests/conftest.py
from __future__ import annotations

from types import SimpleNamespace

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.db.mongo_client import MongoConnectionCache
from app.main import create_app
from app.services.notify_service import ContactNotifier
from app.settings import Settings

TEST_DB = "catalog_test"


class FakeMongoClient:
    """mongomock database behind the bits of MongoClient the cache touches."""

    def __init__(self, fail_ping: Exception | None = None):
        self.backend = mongomock.MongoClient()
        self.admin = SimpleNamespace(command=self._command)
        self.fail_ping = fail_ping
        self.closed = False

    def _command(self, name, *args, **kwargs):
        if self.fail_ping is not None:
            raise self.fail_ping
        return {"ok": 1.0}

    def __getitem__(self, name):
        return self.backend[name]

    def close(self):
        self.closed = True


class ClientFactory:
    def __init__(self, client: FakeMongoClient | None = None):
        self.client = client or FakeMongoClient()
        self.calls = []

    def __call__(self, uri, **kwargs):
        self.calls.append((uri, kwargs))
        return self.client


def make_settings(**overrides) -> Settings:
    values = dict(
        API_PREFIX="/api",
        MONGO_URI="mongodb://mongo.test:27017",
        MONGO_DB=TEST_DB,
        ENSURE_INDEXES=False,
        SMTP_HOST="",
        SMTP_USER="",
        SMTP_PASS="",
        CONTACT_TO_EMAIL="",
        CONTACT_FROM_EMAIL="",
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def factory():
    return ClientFactory()


@pytest.fixture
def cache(settings, factory):
    return MongoConnectionCache(settings, client_factory=factory)


@pytest.fixture
def db(factory):
    return factory.client[TEST_DB]


@pytest.fixture
def client(settings, cache):
    app = create_app(settings, cache=cache, notifier=ContactNotifier(settings))
    return TestClient(app)
