"""Database connection and session management."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from pictureteam.config import Settings

Base = declarative_base()


def create_db_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured database.

    The pool is bounded: at most ``db_pool_size`` connections are open and a
    caller waits up to ``db_pool_timeout`` seconds for one to free up.
    """
    echo = settings.environment == "development"

    if settings.database_url.startswith("sqlite"):
        # In-memory SQLite must share a single connection across threads
        if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(
                settings.database_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=echo,
            )
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            pool_size=settings.db_pool_size,
            max_overflow=0,
            pool_timeout=settings.db_pool_timeout,
            echo=echo,
        )

    return create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=0,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
        echo=echo,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory; services open one session per operation."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables (in production, use migrations)."""
    # Import models so they register with Base.metadata
    import pictureteam.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
