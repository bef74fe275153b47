import os

# the app modules build their SQLAlchemy engine at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENABLE_SNAPSHOT_BATCH", "false")

import pytest

from fakes import FakeKeyValueStore, FakeVideoStatsClient


@pytest.fixture
def store():
    return FakeKeyValueStore()


@pytest.fixture
def client():
    return FakeVideoStatsClient()
