"""Pytest configuration and fixtures shared by the tracker tests."""

import os
import tempfile
import uuid

os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="tracker-logs-"))

import pytest

from tracker import schemas
from tracker.database.client import StoreClient
from tracker.database.database import create_session_factory, get_base_metadata
from tests.fakes import FakeAuth, FakeFeed


@pytest.fixture(scope="function")
def session_factory(tmp_path):
    """File-backed SQLite store with all tables, fresh per test.

    A file rather than :memory: so reads issued from worker threads see the
    same data.
    """
    factory = create_session_factory(
        f"sqlite:///{tmp_path / 'store.db'}",
        connect_args={"check_same_thread": False}
    )
    engine = factory.kw["bind"]
    get_base_metadata().create_all(engine)
    yield factory
    engine.dispose()


@pytest.fixture
def user():
    return schemas.User(id=str(uuid.uuid4()), email="operator@example.com")


@pytest.fixture
def feed():
    return FakeFeed()


@pytest.fixture
def client(session_factory, user, feed):
    return StoreClient(session_factory, FakeAuth(user), feed)
