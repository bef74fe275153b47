from datetime import date

import pytest
from fastapi.testclient import TestClient

from account.application.usecase.account_usecase import AccountUseCase
from account.infrastructure.repository.account_repository_impl import AccountRepositoryImpl
from app.main import app
from fakes import make_snapshot
from tracking.adapter.input.web.dependencies import (
    get_account_usecase,
    get_export_usecase,
    get_impact_query_usecase,
    get_playlist_view_usecase,
    get_snapshot_usecase,
)
from tracking.application.usecase.export_usecase import ExportUseCase
from tracking.application.usecase.impact_query_usecase import ImpactQueryUseCase
from tracking.application.usecase.playlist_view_usecase import PlaylistViewUseCase
from tracking.application.usecase.snapshot_usecase import SnapshotUseCase
from tracking.domain.video_stats import PlaylistSummary
from tracking.infrastructure.repository.playlist_view_repository_impl import KeyValuePlaylistViewRepository
from tracking.infrastructure.repository.snapshot_repository_impl import KeyValueSnapshotRepository


@pytest.fixture
def repository(store):
    return KeyValueSnapshotRepository(store)


@pytest.fixture
def api(store, client, repository):
    accounts = AccountRepositoryImpl(store)

    def playlist_views():
        return PlaylistViewUseCase(KeyValuePlaylistViewRepository(store), repository)

    app.dependency_overrides[get_snapshot_usecase] = lambda: SnapshotUseCase(
        repository, client, accounts, sleep=lambda _: None, today=lambda: date(2024, 5, 3)
    )
    app.dependency_overrides[get_impact_query_usecase] = lambda: ImpactQueryUseCase(repository)
    app.dependency_overrides[get_playlist_view_usecase] = playlist_views
    app.dependency_overrides[get_export_usecase] = lambda: ExportUseCase(ImpactQueryUseCase(repository), playlist_views())
    app.dependency_overrides[get_account_usecase] = lambda: AccountUseCase(accounts)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}


def test_take_snapshot_from_url(api, client, repository):
    client.add_video("vid1", 1700, ["A"])

    response = api.post("/snapshots", json={"video": "https://youtu.be/vid1"})

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "recorded"
    assert body["snapshot"]["date"] == "2024-05-03"
    assert body["snapshot"]["playlists"] == [{"playlist_id": "A", "playlist_title": "Playlist A"}]
    assert len(repository.get_snapshots("vid1")) == 1


def test_take_snapshot_errors(api, client):
    client.video_errors["broken"] = RuntimeError("quota exceeded")

    assert api.post("/snapshots", json={"video": "unknown"}).status_code == 404
    failed = api.post("/snapshots", json={"video": "broken"})
    assert failed.status_code == 502
    assert failed.json()["detail"] == "quota exceeded"
    assert api.post("/snapshots", json={"video": "https://example.com/x"}).status_code == 400


def test_run_snapshots_for_default_account(api, client):
    client.playlists[None] = [PlaylistSummary("A", "Playlist A")]
    client.playlist_items = {"A": ["v1", "v2"]}
    client.add_video("v1", 10, ["A"])

    body = api.post("/snapshots/run").json()

    assert body["recorded"] == 1
    assert body["not_found"] == 1
    assert body["failed"] == 0


def test_impact_reports_insufficient_then_ok(api, repository):
    repository.record_snapshot(make_snapshot(1, 1000, ["A"]))
    first = api.get("/impact/vid1").json()
    assert first["status"] == "insufficient_data"
    assert first["impacts"] == []

    repository.record_snapshot(make_snapshot(2, 1500, ["A", "B"]))
    body = api.get("/impact/vid1").json()
    assert body["status"] == "ok"
    assert body["snapshot_count"] == 2
    assert [i["playlist_id"] for i in body["impacts"]] == ["A", "B"]
    assert body["impacts"][1]["views_contribution"] == pytest.approx(250)
    assert body["impacts"][1]["contribution_percentage"] == pytest.approx(16.6667, rel=1e-4)


def test_snapshot_history_period_and_clear(api, repository):
    for day, views in ((3, 300), (1, 100), (2, 200)):
        repository.record_snapshot(make_snapshot(day, views, ["A"]))

    body = api.get("/snapshots/vid1").json()
    assert [s["date"] for s in body["snapshots"]] == ["2024-05-01", "2024-05-02", "2024-05-03"]

    ranged = api.get("/snapshots/vid1", params={"start": "2024-05-02", "end": "2024-05-02"}).json()
    assert ranged["snapshot_count"] == 1

    assert api.get("/snapshots").json() == {"video_ids": ["vid1"]}
    assert api.delete("/snapshots/vid1").json() == {"deleted": True}
    assert api.get("/snapshots/vid1").json()["snapshots"] == []
    assert api.get("/snapshots").json() == {"video_ids": []}


def test_export_downloads(api, repository):
    repository.record_snapshot(make_snapshot(1, 1000, ["A"]))
    assert api.get("/impact/vid1/export", params={"format": "csv"}).status_code == 404

    repository.record_snapshot(make_snapshot(2, 1500, ["A", "B"]))
    response = api.get("/impact/vid1/export", params={"format": "csv"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="video-vid1-impact-data.csv"' in response.headers["content-disposition"]
    assert response.text.startswith("Playlist Impact Data")

    assert api.get("/impact/vid1/export").json()["total_views"] == 1500
    assert api.get("/impact/vid1/export", params={"format": "xml"}).status_code == 422


def test_playlist_view_counters(api, repository):
    repository.record_snapshot(make_snapshot(1, 10, ["A", "B"]))

    assert api.post("/impact/vid1/playlists/A/views").json()["views"] == 1
    items = api.get("/impact/vid1/playlist-views").json()["items"]
    assert [(i["playlist_id"], i["estimated_views"]) for i in items] == [("A", 1), ("B", 0)]


def test_account_endpoints(api):
    created = api.post("/accounts", json={"account_id": "acc1", "access_token": "secret"}).json()
    assert created["has_access_token"] is True
    assert "secret" not in str(created)

    assert [a["id"] for a in api.get("/accounts").json()] == ["acc1"]
    assert api.patch("/accounts/acc1", json={"display_name": "Main"}).json()["display_name"] == "Main"
    assert api.get("/accounts/missing").status_code == 404
    assert api.delete("/accounts/acc1").json() == {"deleted": True}
    assert api.delete("/accounts/acc1").status_code == 404
