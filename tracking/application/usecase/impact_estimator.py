from typing import Iterable

from tracking.domain.impact_report import ImpactReport, ImpactStatus
from tracking.domain.playlist_impact import PlaylistImpact
from tracking.domain.video_snapshot import VideoSnapshot

MIN_SNAPSHOTS = 2


def sort_snapshots(snapshots: Iterable[VideoSnapshot]) -> list[VideoSnapshot]:
    return sorted(snapshots, key=lambda s: s.date)


def estimate_playlist_impact(snapshots: Iterable[VideoSnapshot]) -> list[PlaylistImpact]:
    """
    Splits the view growth of each snapshot interval equally across the playlists
    present in the interval's end snapshot.

    - fewer than 2 snapshots -> []
    - negative deltas are clamped to 0, zero deltas are skipped entirely
    - growth in an interval whose end snapshot has no playlist is attributed nowhere
    - percentages are relative to the latest absolute view count, not to the growth
    """
    impacts, _ = _accumulate(sort_snapshots(snapshots))
    return impacts


def build_impact_report(video_id: str, snapshots: Iterable[VideoSnapshot]) -> ImpactReport:
    ordered = sort_snapshots(snapshots)
    if len(ordered) < MIN_SNAPSHOTS:
        return ImpactReport(
            video_id=video_id,
            status=ImpactStatus.INSUFFICIENT_DATA,
            snapshot_count=len(ordered),
            total_views=ordered[-1].total_views if ordered else None,
            first_date=ordered[0].date if ordered else None,
            last_date=ordered[-1].date if ordered else None,
        )

    impacts, unexplained = _accumulate(ordered)
    return ImpactReport(
        video_id=video_id,
        status=ImpactStatus.OK,
        snapshot_count=len(ordered),
        impacts=impacts,
        total_views=ordered[-1].total_views,
        first_date=ordered[0].date,
        last_date=ordered[-1].date,
        attributed_views=sum(i.views_contribution for i in impacts),
        unexplained_views=unexplained,
    )


def _accumulate(ordered: list[VideoSnapshot]) -> tuple[list[PlaylistImpact], int]:
    if len(ordered) < MIN_SNAPSHOTS:
        return [], 0

    impact_by_playlist: dict[str, PlaylistImpact] = {}
    for snapshot in ordered:
        for membership in snapshot.playlists:
            impact_by_playlist.setdefault(
                membership.playlist_id,
                PlaylistImpact(playlist_id=membership.playlist_id, playlist_title=""),
            )
    # title comes from the most recent snapshot that still lists the playlist
    for snapshot in reversed(ordered):
        for membership in snapshot.playlists:
            impact = impact_by_playlist[membership.playlist_id]
            if not impact.playlist_title:
                impact.playlist_title = membership.playlist_title

    unexplained = 0
    for prev, curr in zip(ordered, ordered[1:]):
        delta = max(0, curr.total_views - prev.total_views)
        if delta == 0:
            continue

        active = curr.playlists
        if not active:
            unexplained += delta
            continue

        share = delta / len(active)
        for membership in active:
            impact = impact_by_playlist[membership.playlist_id]
            impact.views_contribution += share
            impact.days_in_playlist += 1

    latest_views = ordered[-1].total_views
    for impact in impact_by_playlist.values():
        if latest_views > 0:
            impact.contribution_percentage = impact.views_contribution / latest_views * 100
        else:
            impact.contribution_percentage = 0.0

    impacts = sorted(impact_by_playlist.values(), key=lambda i: i.views_contribution, reverse=True)
    return impacts, unexplained
