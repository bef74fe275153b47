import logging
from datetime import datetime, timezone
from typing import Callable

from tracking.application.port.playlist_view_repository_port import PlaylistViewRepositoryPort
from tracking.application.port.snapshot_repository_port import SnapshotRepositoryPort
from tracking.application.usecase.impact_estimator import sort_snapshots
from tracking.domain.playlist_view_estimate import PlaylistViewEstimate

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PlaylistViewUseCase:
    """
    Explicit per-playlist view counters, kept next to the snapshot-based estimate.
    The playlists considered for a video are those of its latest snapshot.
    """

    def __init__(
        self,
        repository: PlaylistViewRepositoryPort,
        snapshot_repository: SnapshotRepositoryPort,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.snapshot_repository = snapshot_repository
        self.clock = clock

    def register_view(self, video_id: str, playlist_id: str) -> int:
        counters = self.repository.load_counters(video_id)
        entry = counters.setdefault(playlist_id, {"views": 0})
        entry["views"] = int(entry.get("views") or 0) + 1
        entry["lastUpdate"] = self.clock().isoformat()
        self.repository.save_counters(video_id, counters)
        logger.info("Registered playlist view | video=%s playlist=%s", video_id, playlist_id)
        return entry["views"]

    def estimate_playlist_views(self, video_id: str) -> list[PlaylistViewEstimate]:
        snapshots = sort_snapshots(self.snapshot_repository.get_snapshots(video_id))
        if not snapshots:
            return []

        counters = self.repository.load_counters(video_id)
        changed = False
        for membership in snapshots[-1].playlists:
            if membership.playlist_id not in counters:
                counters[membership.playlist_id] = {"views": 0, "lastUpdate": self.clock().isoformat()}
                changed = True
        if changed:
            self.repository.save_counters(video_id, counters)

        total = sum(int(c.get("views") or 0) for c in counters.values())
        estimates: list[PlaylistViewEstimate] = []
        for membership in snapshots[-1].playlists:
            entry = counters[membership.playlist_id]
            views = int(entry.get("views") or 0)
            estimates.append(
                PlaylistViewEstimate(
                    playlist_id=membership.playlist_id,
                    playlist_title=membership.playlist_title,
                    estimated_views=views,
                    percentage=(views / total * 100) if total > 0 else 0.0,
                    last_update=_parse_timestamp(entry.get("lastUpdate")),
                )
            )
        return sorted(estimates, key=lambda e: e.estimated_views, reverse=True)


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
