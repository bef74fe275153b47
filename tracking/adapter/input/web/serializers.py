from tracking.domain.impact_report import ImpactReport
from tracking.domain.playlist_impact import PlaylistImpact
from tracking.domain.playlist_view_estimate import PlaylistViewEstimate
from tracking.domain.snapshot_outcome import SnapshotOutcome
from tracking.domain.video_snapshot import VideoSnapshot


def snapshot_to_dict(snapshot: VideoSnapshot) -> dict:
    return {
        "video_id": snapshot.video_id,
        "date": snapshot.date,
        "total_views": snapshot.total_views,
        "title": snapshot.title,
        "playlists": [
            {"playlist_id": p.playlist_id, "playlist_title": p.playlist_title} for p in snapshot.playlists
        ],
    }


def impact_to_dict(impact: PlaylistImpact) -> dict:
    return {
        "playlist_id": impact.playlist_id,
        "playlist_title": impact.playlist_title,
        "views_contribution": impact.views_contribution,
        "contribution_percentage": impact.contribution_percentage,
        "days_in_playlist": impact.days_in_playlist,
    }


def report_to_dict(report: ImpactReport) -> dict:
    return {
        "video_id": report.video_id,
        "status": report.status.value,
        "has_enough_snapshots": report.has_enough_snapshots,
        "snapshot_count": report.snapshot_count,
        "total_views": report.total_views,
        "first_date": report.first_date,
        "last_date": report.last_date,
        "attributed_views": report.attributed_views,
        "unexplained_views": report.unexplained_views,
        "impacts": [impact_to_dict(i) for i in report.impacts],
    }


def outcome_to_dict(outcome: SnapshotOutcome) -> dict:
    return {
        "video_id": outcome.video_id,
        "status": outcome.status.value,
        "error": outcome.error,
        "snapshot": snapshot_to_dict(outcome.snapshot) if outcome.snapshot else None,
    }


def estimate_to_dict(estimate: PlaylistViewEstimate) -> dict:
    return {
        "playlist_id": estimate.playlist_id,
        "playlist_title": estimate.playlist_title,
        "estimated_views": estimate.estimated_views,
        "percentage": estimate.percentage,
        "last_update": estimate.last_update,
    }
