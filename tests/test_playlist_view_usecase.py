from datetime import datetime, timezone

import pytest

from fakes import make_snapshot
from tracking.application.usecase.playlist_view_usecase import PlaylistViewUseCase
from tracking.infrastructure.repository.playlist_view_repository_impl import (
    KEY_PREFIX,
    KeyValuePlaylistViewRepository,
)
from tracking.infrastructure.repository.snapshot_repository_impl import KeyValueSnapshotRepository

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def usecase(store):
    snapshots = KeyValueSnapshotRepository(store)
    snapshots.record_snapshot(make_snapshot(1, 100, ["A"]))
    snapshots.record_snapshot(make_snapshot(2, 200, ["A", "B", "C"]))
    return PlaylistViewUseCase(KeyValuePlaylistViewRepository(store), snapshots, clock=lambda: NOW)


def test_register_view_increments_counter(usecase, store):
    assert usecase.register_view("vid1", "A") == 1
    assert usecase.register_view("vid1", "A") == 2
    assert usecase.register_view("vid1", "B") == 1
    assert f"{KEY_PREFIX}vid1" in store.data


def test_estimates_cover_latest_playlists_with_percentages(usecase):
    for _ in range(3):
        usecase.register_view("vid1", "B")
    usecase.register_view("vid1", "A")

    estimates = usecase.estimate_playlist_views("vid1")

    assert [e.playlist_id for e in estimates] == ["B", "A", "C"]
    assert estimates[0].estimated_views == 3
    assert estimates[0].percentage == pytest.approx(75.0)
    assert estimates[2].estimated_views == 0
    assert estimates[2].percentage == 0
    assert estimates[0].last_update == NOW


def test_estimates_initialise_missing_counters(usecase, store):
    usecase.estimate_playlist_views("vid1")
    counters = usecase.repository.load_counters("vid1")
    assert set(counters) == {"A", "B", "C"}
    assert all(c["views"] == 0 for c in counters.values())


def test_video_without_snapshots_has_no_estimates(usecase):
    assert usecase.estimate_playlist_views("unknown") == []


def test_corrupt_counters_read_as_empty(usecase, store):
    store.data[f"{KEY_PREFIX}vid1"] = "not json"
    assert usecase.repository.load_counters("vid1") == {}
