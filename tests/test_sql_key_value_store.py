import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.database.session import Base
from tracking.infrastructure.orm.models import KeyValueORM
from tracking.infrastructure.repository.snapshot_repository_impl import KeyValueSnapshotRepository
from tracking.infrastructure.store.sql_key_value_store import SqlKeyValueStore
from fakes import make_snapshot


@pytest.fixture
def sql_store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine, tables=[KeyValueORM.__table__])
    return SqlKeyValueStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))


def test_get_set_remove(sql_store):
    assert sql_store.get("missing") is None

    sql_store.set("k", "v1")
    sql_store.set("k", "v2")
    assert sql_store.get("k") == "v2"

    sql_store.remove("k")
    assert sql_store.get("k") is None
    sql_store.remove("k")


def test_snapshot_repository_round_trips_through_sql(sql_store):
    repository = KeyValueSnapshotRepository(sql_store)
    repository.record_snapshot(make_snapshot(1, 100, ["A"]))
    repository.record_snapshot(make_snapshot(2, 180, ["A", "B"]))

    reloaded = KeyValueSnapshotRepository(sql_store)
    snapshots = reloaded.get_snapshots("vid1")
    assert [s.total_views for s in snapshots] == [100, 180]
    assert [p.playlist_title for p in snapshots[1].playlists] == ["Playlist A", "Playlist B"]


def test_rows_carry_an_update_timestamp(sql_store):
    sql_store.set("k", "v1")

    with sql_store.session_factory() as db:
        assert db.get(KeyValueORM, "k").updated_at is not None
