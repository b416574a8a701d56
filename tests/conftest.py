"""Shared fixtures — app built from the factory over an in-memory SQLite store.

Every test gets a fresh database: the TestClient context runs the app
lifespan, which applies the schema migrations.
"""

import os

# Importing guest_registry.main builds the module-level app from env settings
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from guest_registry.config import Settings
from guest_registry.main import create_app
from guest_registry.models.guest import Guest


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", _env_file=None)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def session_factory(app, client):
    """Open short-lived sessions on the same store the app uses."""
    return app.state.database.session


@pytest.fixture
def guest_payload():
    return {
        "line_user_id": "u1",
        "host_name": "Alice",
        "first_name": "Bob",
        "last_name": "Lee",
        "date": "2024-06-01",
        "arrival_time": "14:00",
    }


@pytest.fixture
def insert_guest(session_factory):
    """Insert a row directly, bypassing the API (lets tests pin created_at)."""

    def _insert(**fields):
        values = {
            "line_user_id": "u1",
            "host_name": "Alice",
            "first_name": "Guest",
            "last_name": "Test",
            "visit_date": "2024-06-01",
        }
        values.update(fields)
        with session_factory() as db:
            guest = Guest(**values)
            db.add(guest)
            db.commit()
            return guest.id

    return _insert


@pytest.fixture
def count_guests(session_factory):
    def _count():
        with session_factory() as db:
            return db.query(Guest).count()

    return _count
