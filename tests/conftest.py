import io
import os

# Keep the module-level app off the production database while testing
os.environ.setdefault("PT_DATABASE_URL", "sqlite://")
os.environ.setdefault("PT_ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update

from pictureteam.config import Settings
from pictureteam.database import create_db_engine, create_session_factory, init_db
from pictureteam.main import create_app
from pictureteam.models import User
from pictureteam.services import build_services

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture(scope="function")
def settings(tmp_path):
    """Settings pointing at an in-memory database and a temp image dir."""
    return Settings(
        database_url="sqlite://",
        environment="test",
        secret_key="test-secret",
        image_storage_path=tmp_path / "images",
    )


@pytest.fixture(scope="function")
def engine(settings):
    engine = create_db_engine(settings)
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture(scope="function")
def services(settings, session_factory):
    return build_services(settings, session_factory)


@pytest.fixture(scope="function")
def client(settings, services):
    app = create_app(settings, services)
    with TestClient(app) as client:
        yield client


@pytest.fixture(scope="function")
def make_user(services):
    """Register a user and return its id."""
    counter = {"n": 0}

    def _make_user(email=None, password="secret"):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        return services.auth.register(email, password)

    return _make_user


@pytest.fixture(scope="function")
def make_admin(make_user, session_factory):
    """Register a user and grant it the admin flag."""

    def _make_admin(email="admin@example.com", password="secret"):
        user_id = make_user(email, password)
        set_admin(session_factory, user_id, True)
        return user_id

    return _make_admin


def set_admin(session_factory, user_id, is_admin):
    with session_factory() as db:
        db.execute(update(User).where(User.id == user_id).values(is_admin=is_admin))
        db.commit()


def png_stream(data=PNG_BYTES):
    return io.BytesIO(data)
