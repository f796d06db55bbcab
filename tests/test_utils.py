import logging
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from pictureteam.config import Settings
from pictureteam.utils.logger import configure_logging, logger, resolve_level
from pictureteam.utils.serialization import serialize_datetime, serialize_uuid, serialize_uuids


@pytest.mark.parametrize(
    "environment,log_level,expected",
    [
        ("development", None, logging.DEBUG),
        ("production", None, logging.INFO),
        ("development", "warning", logging.WARNING),
        ("production", "ERROR", logging.ERROR),
        ("production", "nonsense", logging.INFO),
    ],
)
def test_resolve_level(environment, log_level, expected):
    settings = Settings(environment=environment, log_level=log_level)

    assert resolve_level(settings) == expected


def test_configure_logging_applies_level():
    previous = logger.level
    try:
        configure_logging(Settings(environment="production", log_level="warning"))

        assert logger.level == logging.WARNING
        assert all(h.level == logging.WARNING for h in logger.handlers)
        assert len(logger.handlers) == 1
        assert not logger.propagate
    finally:
        logger.setLevel(previous)
        for handler in logger.handlers:
            handler.setLevel(previous)


def test_serialize_datetime_tags_naive_values_as_utc():
    naive = datetime(2024, 5, 1, 12, 30)

    assert serialize_datetime(naive) == "2024-05-01T12:30:00+00:00"
    assert serialize_datetime(None) is None


def test_serialize_datetime_keeps_offset():
    aware = datetime(2024, 5, 1, 12, 30, tzinfo=timezone(timedelta(hours=2)))

    assert serialize_datetime(aware) == "2024-05-01T12:30:00+02:00"


def test_serialize_uuids():
    ids = [uuid.uuid4(), uuid.uuid4()]

    assert serialize_uuids(ids) == [str(i) for i in ids]
    assert serialize_uuid(None) is None
