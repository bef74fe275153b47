from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from tracking.domain.video_snapshot import VideoSnapshot


class SnapshotStatus(str, Enum):
    RECORDED = "recorded"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass
class SnapshotOutcome:
    video_id: str
    status: SnapshotStatus
    snapshot: Optional[VideoSnapshot] = None
    error: Optional[str] = None


@dataclass
class AccountFailure:
    account_id: str | None
    error: str


@dataclass
class SnapshotRunSummary:
    """
    Result of one pass over accounts -> playlists -> videos.
    Failures are collected here instead of aborting the run.
    """
    outcomes: list[SnapshotOutcome] = field(default_factory=list)
    failed_accounts: list[AccountFailure] = field(default_factory=list)
    failed_playlists: list[str] = field(default_factory=list)

    def _count(self, status: SnapshotStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def recorded_count(self) -> int:
        return self._count(SnapshotStatus.RECORDED)

    @property
    def not_found_count(self) -> int:
        return self._count(SnapshotStatus.NOT_FOUND)

    @property
    def failed_count(self) -> int:
        return self._count(SnapshotStatus.FAILED)

    def merge(self, other: "SnapshotRunSummary") -> None:
        self.outcomes.extend(other.outcomes)
        self.failed_accounts.extend(other.failed_accounts)
        self.failed_playlists.extend(other.failed_playlists)

    def to_dict(self) -> dict:
        return {
            "recorded": self.recorded_count,
            "not_found": self.not_found_count,
            "failed": self.failed_count,
            "failed_accounts": [{"account_id": f.account_id, "error": f.error} for f in self.failed_accounts],
            "failed_playlists": list(self.failed_playlists),
            "videos": [
                {"video_id": o.video_id, "status": o.status.value, "error": o.error} for o in self.outcomes
            ],
        }
