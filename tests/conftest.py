"""Shared fixtures."""
from datetime import datetime, timezone

import pytest
from bmi_bot.database import create_session_factory, init_db
from bmi_bot.models import Gender
from bmi_bot.services.bmi_calc import build_record
from bmi_bot.services.storage import KeyValueStorage, RecordStore


@pytest.fixture
def session_factory(tmp_path):
    factory = create_session_factory(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(factory.kw["bind"])
    return factory


@pytest.fixture
def store(session_factory):
    return RecordStore(KeyValueStorage(session_factory), key="imcRecords")


@pytest.fixture
def make_record():
    """Build a valid record for a given day of 2026."""

    def _make(name="Ana", gender=Gender.FEMALE, weight="60", height="165", age="30",
              month=1, day=1, hour=12):
        now = datetime(2026, month, day, hour, 0, tzinfo=timezone.utc)
        return build_record(name, gender, weight, height, age, now=now)

    return _make
