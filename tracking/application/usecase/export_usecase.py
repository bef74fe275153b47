import csv
import io
import json
import re
from dataclasses import dataclass

from tracking.application.usecase.impact_estimator import MIN_SNAPSHOTS
from tracking.application.usecase.impact_query_usecase import ImpactQueryUseCase
from tracking.application.usecase.playlist_view_usecase import PlaylistViewUseCase

EXPORT_FORMATS = ("csv", "json")


class InsufficientSnapshotsError(ValueError):
    pass


@dataclass
class ExportDocument:
    content: str
    filename: str
    media_type: str


def sanitize_file_name(name: str) -> str:
    return re.sub(r'[/\\:*?"<>|]', "_", name)[:100]


class ExportUseCase:
    def __init__(self, query_usecase: ImpactQueryUseCase, playlist_view_usecase: PlaylistViewUseCase):
        self.query_usecase = query_usecase
        self.playlist_view_usecase = playlist_view_usecase

    def build_export_data(self, video_id: str) -> dict:
        snapshots = self.query_usecase.get_video_snapshots(video_id)
        if len(snapshots) < MIN_SNAPSHOTS:
            raise InsufficientSnapshotsError(
                f"At least {MIN_SNAPSHOTS} snapshots are required to export impact data "
                f"(video {video_id} has {len(snapshots)})"
            )

        report = self.query_usecase.get_impact_report(video_id)
        estimates = self.playlist_view_usecase.estimate_playlist_views(video_id)
        latest = snapshots[-1]

        return {
            "video_id": video_id,
            "title": latest.title or video_id,
            "total_views": latest.total_views,
            "snapshot_period": {
                "start_date": snapshots[0].date.isoformat(),
                "end_date": latest.date.isoformat(),
                "total_snapshots": len(snapshots),
            },
            "attributed_views": report.attributed_views,
            "unexplained_views": report.unexplained_views,
            "impact_data": [
                {
                    "playlist_id": i.playlist_id,
                    "playlist_title": i.playlist_title,
                    "views_contribution": i.views_contribution,
                    "contribution_percentage": i.contribution_percentage,
                    "days_in_playlist": i.days_in_playlist,
                }
                for i in report.impacts
            ],
            "playlist_views_estimates": [
                {
                    "playlist_id": e.playlist_id,
                    "playlist_title": e.playlist_title,
                    "estimated_views": e.estimated_views,
                    "percentage": e.percentage,
                    "last_update": e.last_update.isoformat() if e.last_update else None,
                }
                for e in estimates
            ],
            "snapshots": [s.to_dict() for s in snapshots],
        }

    def export_impact(self, video_id: str, fmt: str = "json") -> ExportDocument:
        fmt = fmt.lower()
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {fmt}")

        data = self.build_export_data(video_id)
        base_name = f"video-{sanitize_file_name(video_id)}-impact-data"
        if fmt == "json":
            return ExportDocument(
                content=json.dumps(data, ensure_ascii=False, indent=2),
                filename=f"{base_name}.json",
                media_type="application/json",
            )
        return ExportDocument(
            content=self._to_csv(data),
            filename=f"{base_name}.csv",
            media_type="text/csv; charset=utf-8",
        )

    @staticmethod
    def _to_csv(data: dict) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        period = data["snapshot_period"]

        writer.writerow(["Playlist Impact Data"])
        writer.writerow(["Video ID", data["video_id"]])
        writer.writerow(["Video Title", data["title"]])
        writer.writerow(["Total Views", data["total_views"]])
        writer.writerow(["Analysis Period", f"{period['start_date']} to {period['end_date']}"])
        writer.writerow(["Total Snapshots", period["total_snapshots"]])
        writer.writerow([])

        writer.writerow(["Playlist", "Contributed Views", "Contribution Percentage", "Days in Playlist"])
        for impact in data["impact_data"]:
            writer.writerow(
                [
                    impact["playlist_title"],
                    round(impact["views_contribution"]),
                    f"{impact['contribution_percentage']:.2f}%",
                    impact["days_in_playlist"],
                ]
            )

        writer.writerow([])
        writer.writerow(["Playlist View Estimates"])
        writer.writerow(["Playlist", "Estimated Views", "Percentage", "Last Update"])
        for estimate in data["playlist_views_estimates"]:
            writer.writerow(
                [
                    estimate["playlist_title"],
                    estimate["estimated_views"],
                    f"{estimate['percentage']:.2f}%",
                    estimate["last_update"] or "",
                ]
            )

        writer.writerow([])
        writer.writerow(["Snapshot History"])
        writer.writerow(["Date", "Total Views", "Playlists"])
        for snapshot in data["snapshots"]:
            titles = "; ".join(p["playlistTitle"] for p in snapshot["playlists"])
            writer.writerow([snapshot["date"], snapshot["totalViews"], titles])

        return buffer.getvalue()
