import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional

from tracking.domain.snapshot_schedule import SnapshotSchedule
from tracking.domain.snapshot_outcome import SnapshotRunSummary

logger = logging.getLogger(__name__)


class SnapshotScheduler:
    """
    Checks a due predicate on a fixed interval instead of holding a long timer,
    so a fake clock can drive it in tests.
    """

    def __init__(
        self,
        schedule: SnapshotSchedule,
        runner: Callable[[], Awaitable[SnapshotRunSummary]],
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.schedule = schedule
        self.runner = runner
        self.clock = clock
        self.last_summary: Optional[SnapshotRunSummary] = None

    def start(self) -> datetime:
        next_run = self.schedule.arm(self.clock())
        logger.info("[SNAPSHOT-BATCH] next automatic snapshot scheduled for %s", next_run.isoformat())
        return next_run

    async def tick(self) -> Optional[SnapshotRunSummary]:
        if self.schedule.next_run_at is None:
            self.start()
        if not self.schedule.is_due(self.clock()):
            return None

        summary = None
        try:
            logger.info("[SNAPSHOT-BATCH] run started")
            summary = await self.runner()
            self.last_summary = summary
            logger.info(
                "[SNAPSHOT-BATCH] run finished | recorded=%d not_found=%d failed=%d",
                summary.recorded_count,
                summary.not_found_count,
                summary.failed_count,
            )
        except Exception:
            logger.exception("[SNAPSHOT-BATCH] run failed")
        finally:
            self.start()
        return summary

    async def run_forever(self, check_interval_seconds: float = 60.0, sleep=asyncio.sleep) -> None:
        self.start()
        try:
            while True:
                await self.tick()
                # wake up early when the next run is closer than one interval
                remaining = self.schedule.seconds_until_due(self.clock())
                await sleep(min(check_interval_seconds, max(remaining, 1.0)))
        except asyncio.CancelledError:
            logger.info("[SNAPSHOT-BATCH] scheduler stopped")
            raise
