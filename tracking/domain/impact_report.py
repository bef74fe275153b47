from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from tracking.domain.playlist_impact import PlaylistImpact


class ImpactStatus(str, Enum):
    OK = "ok"
    INSUFFICIENT_DATA = "insufficient_data"


@dataclass
class ImpactReport:
    video_id: str
    status: ImpactStatus
    snapshot_count: int
    impacts: list[PlaylistImpact] = field(default_factory=list)
    total_views: Optional[int] = None
    first_date: Optional[date] = None
    last_date: Optional[date] = None
    attributed_views: float = 0.0
    # growth observed in intervals whose end snapshot had no playlist
    unexplained_views: int = 0

    @property
    def has_enough_snapshots(self) -> bool:
        return self.status == ImpactStatus.OK
