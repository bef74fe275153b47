import logging
import time
from datetime import date, datetime, timezone
from typing import Callable, Optional

from account.application.port.account_repository_port import AccountRepositoryPort
from tracking.application.port.snapshot_repository_port import SnapshotRepositoryPort
from tracking.application.port.video_stats_port import VideoStatsPort
from tracking.domain.snapshot_outcome import (
    AccountFailure,
    SnapshotOutcome,
    SnapshotRunSummary,
    SnapshotStatus,
)
from tracking.domain.video_snapshot import VideoSnapshot

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class SnapshotUseCase:
    def __init__(
        self,
        repository: SnapshotRepositoryPort,
        client: VideoStatsPort,
        account_repository: AccountRepositoryPort | None = None,
        video_delay_seconds: float = 0.5,
        account_delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
        today: Callable[[], date] = utc_today,
    ):
        # every call to the platform is made one at a time with a fixed pause in between
        self.repository = repository
        self.client = client
        self.account_repository = account_repository
        self.video_delay_seconds = video_delay_seconds
        self.account_delay_seconds = account_delay_seconds
        self.sleep = sleep
        self.today = today

    def take_snapshot_for_video(self, video_id: str, account_id: Optional[str] = None) -> SnapshotOutcome:
        try:
            stats = self.client.fetch_video_stats(video_id, account_id)
        except Exception as exc:
            logger.exception("Error taking snapshot for video %s", video_id)
            return SnapshotOutcome(video_id=video_id, status=SnapshotStatus.FAILED, error=str(exc))

        if stats is None:
            logger.warning("Video %s not found", video_id)
            return SnapshotOutcome(video_id=video_id, status=SnapshotStatus.NOT_FOUND)

        snapshot = VideoSnapshot(
            video_id=video_id,
            date=self.today(),
            total_views=stats.total_views,
            title=stats.title,
            playlists=list(stats.playlists),
        )
        try:
            self.repository.record_snapshot(snapshot)
        except Exception as exc:
            logger.exception("Error recording snapshot for video %s", video_id)
            return SnapshotOutcome(video_id=video_id, status=SnapshotStatus.FAILED, error=str(exc))
        return SnapshotOutcome(video_id=video_id, status=SnapshotStatus.RECORDED, snapshot=snapshot)

    def take_snapshots_for_account(self, account_id: Optional[str] = None) -> SnapshotRunSummary:
        """
        Snapshots every video of every playlist owned by the account.
        A video listed in several playlists is fetched once per run.
        """
        summary = SnapshotRunSummary()
        label = account_id or "default"
        try:
            playlists = self.client.list_playlists(account_id)
        except Exception as exc:
            logger.exception("Error listing playlists for account %s", label)
            summary.failed_accounts.append(AccountFailure(account_id=account_id, error=str(exc)))
            return summary

        seen: set[str] = set()
        for playlist in playlists:
            try:
                video_ids = self.client.list_playlist_video_ids(playlist.playlist_id, account_id)
            except Exception:
                logger.exception("Error listing videos of playlist %s", playlist.playlist_id)
                summary.failed_playlists.append(playlist.playlist_id)
                continue

            for video_id in video_ids:
                if video_id in seen:
                    continue
                seen.add(video_id)
                summary.outcomes.append(self.take_snapshot_for_video(video_id, account_id))
                self.sleep(self.video_delay_seconds)

        logger.info(
            "Snapshots taken for account %s | recorded=%d not_found=%d failed=%d",
            label,
            summary.recorded_count,
            summary.not_found_count,
            summary.failed_count,
        )
        return summary

    def take_snapshots_for_all_accounts(self) -> SnapshotRunSummary:
        accounts = self.account_repository.find_all() if self.account_repository else []
        if not accounts:
            return self.take_snapshots_for_account(None)

        logger.info("Taking snapshots for %d accounts", len(accounts))
        summary = SnapshotRunSummary()
        for account in accounts:
            try:
                summary.merge(self.take_snapshots_for_account(account.account_id))
            except Exception as exc:
                logger.exception("Error taking snapshots for account %s", account.account_id)
                summary.failed_accounts.append(AccountFailure(account_id=account.account_id, error=str(exc)))
            self.sleep(self.account_delay_seconds)

        logger.info("Snapshots taken for all accounts")
        return summary
