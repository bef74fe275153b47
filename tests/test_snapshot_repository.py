import json
import logging
import threading
from datetime import date

from fakes import FakeKeyValueStore, make_snapshot
from tracking.infrastructure.repository.snapshot_repository_impl import STORAGE_KEY, KeyValueSnapshotRepository


def test_same_day_snapshot_overwrites_previous(store):
    repository = KeyValueSnapshotRepository(store)
    repository.record_snapshot(make_snapshot(1, 100, ["A"]))
    repository.record_snapshot(make_snapshot(1, 250, ["B"]))

    snapshots = repository.get_snapshots("vid1")
    assert len(snapshots) == 1
    assert snapshots[0].total_views == 250
    assert [p.playlist_id for p in snapshots[0].playlists] == ["B"]


def test_every_write_is_persisted(store):
    repository = KeyValueSnapshotRepository(store)
    repository.record_snapshot(make_snapshot(1, 100, ["A"]))
    repository.record_snapshot(make_snapshot(2, 150, ["A"]))
    assert store.set_calls == 2

    reloaded = KeyValueSnapshotRepository(store)
    assert [s.total_views for s in reloaded.get_snapshots("vid1")] == [100, 150]


def test_persisted_document_uses_storage_layout(store):
    repository = KeyValueSnapshotRepository(store)
    repository.record_snapshot(make_snapshot(1, 100, ["A"]))

    payload = json.loads(store.data[STORAGE_KEY])
    assert payload == {
        "vid1": [
            {
                "videoId": "vid1",
                "date": "2024-05-01",
                "totalViews": 100,
                "title": "My video",
                "playlists": [{"playlistId": "A", "playlistTitle": "Playlist A"}],
            }
        ]
    }


def test_snapshots_are_returned_in_storage_order(store):
    repository = KeyValueSnapshotRepository(store)
    repository.record_snapshot(make_snapshot(5, 500))
    repository.record_snapshot(make_snapshot(2, 200))
    assert [s.date for s in repository.get_snapshots("vid1")] == [date(2024, 5, 5), date(2024, 5, 2)]


def test_malformed_document_reads_as_empty(caplog):
    store = FakeKeyValueStore({STORAGE_KEY: "{not json"})
    with caplog.at_level(logging.ERROR):
        repository = KeyValueSnapshotRepository(store)
    assert repository.get_snapshots("vid1") == []
    assert repository.video_ids() == []
    assert "Error loading snapshots" in caplog.text


def test_wrong_shape_reads_as_empty():
    store = FakeKeyValueStore({STORAGE_KEY: "[1, 2, 3]"})
    repository = KeyValueSnapshotRepository(store)
    assert repository.snapshots == {}


def test_unreadable_store_reads_as_empty(store):
    store.fail_get = True
    repository = KeyValueSnapshotRepository(store)
    assert repository.get_snapshots("vid1") == []
    assert not repository.loaded


def test_unreadable_store_is_never_overwritten(store):
    KeyValueSnapshotRepository(store).record_snapshot(make_snapshot(1, 100, video_id="old"))
    store.fail_get = True
    repository = KeyValueSnapshotRepository(store)

    repository.record_snapshot(make_snapshot(2, 50, video_id="new"))

    assert list(json.loads(store.data[STORAGE_KEY])) == ["old"]
    assert repository.get_snapshots("new")[0].total_views == 50


def test_pending_snapshots_are_merged_once_the_store_is_readable(store):
    KeyValueSnapshotRepository(store).record_snapshot(make_snapshot(1, 100, video_id="old"))
    store.fail_get = True
    repository = KeyValueSnapshotRepository(store)
    repository.record_snapshot(make_snapshot(2, 50, video_id="new"))

    store.fail_get = False
    repository.record_snapshot(make_snapshot(3, 80, video_id="new"))

    payload = json.loads(store.data[STORAGE_KEY])
    assert sorted(payload) == ["new", "old"]
    assert [s["totalViews"] for s in payload["new"]] == [50, 80]
    assert repository.loaded


def test_failed_write_is_logged_and_keeps_memory(store, caplog):
    repository = KeyValueSnapshotRepository(store)
    store.fail_set = True
    with caplog.at_level(logging.ERROR):
        repository.record_snapshot(make_snapshot(1, 100))
    assert len(repository.get_snapshots("vid1")) == 1
    assert "Error saving snapshots" in caplog.text


def test_clear_removes_all_snapshots_of_one_video(store):
    repository = KeyValueSnapshotRepository(store)
    repository.record_snapshot(make_snapshot(1, 100, video_id="vid1"))
    repository.record_snapshot(make_snapshot(2, 200, video_id="vid1"))
    repository.record_snapshot(make_snapshot(1, 50, video_id="vid2"))

    repository.clear("vid1")

    assert repository.get_snapshots("vid1") == []
    assert repository.video_ids() == ["vid2"]
    assert KeyValueSnapshotRepository(store).get_snapshots("vid1") == []


def test_duplicate_playlist_ids_are_collapsed():
    snapshot = make_snapshot(1, 100, ["A", "A", "B"])
    assert [p.playlist_id for p in snapshot.playlists] == ["A", "B"]


def test_concurrent_writers_do_not_corrupt_the_map(store):
    repository = KeyValueSnapshotRepository(store)
    errors = []

    def record(prefix):
        try:
            for index in range(500):
                repository.record_snapshot(make_snapshot(1, index, video_id=f"{prefix}-{index}"))
        except Exception as exc:
            errors.append(repr(exc))

    threads = [threading.Thread(target=record, args=(prefix,)) for prefix in ("a", "b")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(repository.video_ids()) == 1000
    assert len(json.loads(store.data[STORAGE_KEY])) == 1000
