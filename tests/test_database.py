import pytest
from sqlalchemy.pool import StaticPool

from pictureteam.config import Settings
from pictureteam.database import create_db_engine, create_session_factory, init_db
from pictureteam.services import build_services
from pictureteam.utils.exceptions import UnexpectedError


@pytest.fixture
def file_settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'pool.db'}",
        environment="test",
        db_pool_size=1,
        db_pool_timeout=0.1,
        image_storage_path=tmp_path / "images",
    )


def test_in_memory_database_shares_one_connection(settings):
    engine = create_db_engine(settings)
    try:
        assert isinstance(engine.pool, StaticPool)
    finally:
        engine.dispose()


def test_file_database_pool_is_bounded(file_settings):
    engine = create_db_engine(file_settings)
    try:
        assert engine.pool.size() == 1
        assert engine.pool.timeout() == 0.1
    finally:
        engine.dispose()


def test_exhausted_pool_raises_unexpected_error(file_settings):
    engine = create_db_engine(file_settings)
    init_db(engine)
    services = build_services(file_settings, create_session_factory(engine))
    try:
        with engine.connect():
            with pytest.raises(UnexpectedError):
                services.categories.list()

        assert services.categories.list() == []
    finally:
        engine.dispose()
