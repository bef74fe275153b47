from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Optional


@dataclass
class SnapshotSchedule:
    """
    Daily cadence anchored to a wall-clock time (03:00 by default).
    Arming is derived from the clock alone, so re-arming after a run or a restart lands on the same slot.
    """
    anchor: time = time(3, 0)
    next_run_at: Optional[datetime] = None

    def next_occurrence(self, now: datetime) -> datetime:
        target = now.replace(
            hour=self.anchor.hour,
            minute=self.anchor.minute,
            second=0,
            microsecond=0,
        )
        if now >= target:
            target += timedelta(days=1)
        return target

    def arm(self, now: datetime) -> datetime:
        self.next_run_at = self.next_occurrence(now)
        return self.next_run_at

    def is_due(self, now: datetime) -> bool:
        return self.next_run_at is not None and now >= self.next_run_at

    def seconds_until_due(self, now: datetime) -> float:
        if self.next_run_at is None:
            self.arm(now)
        return max(0.0, (self.next_run_at - now).total_seconds())
