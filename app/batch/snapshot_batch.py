import asyncio
import logging
from datetime import time

from config.settings import TrackingSettings
from tracking.adapter.input.web.dependencies import get_snapshot_usecase
from tracking.application.usecase.snapshot_scheduler import SnapshotScheduler
from tracking.domain.snapshot_outcome import SnapshotRunSummary
from tracking.domain.snapshot_schedule import SnapshotSchedule

logger = logging.getLogger(__name__)


async def run_snapshot_batch_once() -> SnapshotRunSummary:
    """
    Snapshots every video of every tracked account once.
    The run is sequential and blocking, so it is moved off the event loop.
    """
    usecase = get_snapshot_usecase()
    return await asyncio.to_thread(usecase.take_snapshots_for_all_accounts)


def build_snapshot_scheduler(settings: TrackingSettings | None = None) -> SnapshotScheduler:
    settings = settings or TrackingSettings()
    schedule = SnapshotSchedule(anchor=time(settings.anchor_hour, settings.anchor_minute))
    return SnapshotScheduler(schedule, run_snapshot_batch_once)


async def start_snapshot_scheduler():
    """
    - ENABLE_SNAPSHOT_BATCH=true turns the daily run on (default off).
    - SNAPSHOT_ANCHOR_HOUR / SNAPSHOT_ANCHOR_MINUTE: local wall-clock time of the run (default 03:00).
    - SNAPSHOT_CHECK_INTERVAL_SECONDS: how often the due check runs (default 60).
    """
    settings = TrackingSettings()
    if not settings.batch_enabled:
        logger.info("[SNAPSHOT-BATCH] disabled")
        return

    scheduler = build_snapshot_scheduler(settings)
    await scheduler.run_forever(settings.check_interval_seconds)


if __name__ == "__main__":
    from config.logging_config import setup_logging

    setup_logging()
    result = asyncio.run(run_snapshot_batch_once())
    logger.info("[SNAPSHOT-BATCH] %s", result.to_dict())
