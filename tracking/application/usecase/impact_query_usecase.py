from datetime import date
from typing import Optional

from tracking.application.port.snapshot_repository_port import SnapshotRepositoryPort
from tracking.application.usecase.impact_estimator import build_impact_report, sort_snapshots
from tracking.domain.impact_report import ImpactReport
from tracking.domain.video_snapshot import VideoSnapshot


class ImpactQueryUseCase:
    def __init__(self, repository: SnapshotRepositoryPort):
        # read side: snapshot history and the estimates derived from it
        self.repository = repository

    def get_video_snapshots(self, video_id: str) -> list[VideoSnapshot]:
        return sort_snapshots(self.repository.get_snapshots(video_id))

    def get_video_snapshots_in_period(
        self, video_id: str, start: Optional[date] = None, end: Optional[date] = None
    ) -> list[VideoSnapshot]:
        return [
            s
            for s in self.get_video_snapshots(video_id)
            if (start is None or s.date >= start) and (end is None or s.date <= end)
        ]

    def get_impact_report(self, video_id: str) -> ImpactReport:
        return build_impact_report(video_id, self.repository.get_snapshots(video_id))

    def clear_video(self, video_id: str) -> None:
        self.repository.clear(video_id)

    def tracked_video_ids(self) -> list[str]:
        return self.repository.video_ids()
