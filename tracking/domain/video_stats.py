from dataclasses import dataclass, field

from tracking.domain.video_snapshot import PlaylistMembership


@dataclass
class VideoStats:
    """Current state of a video as reported by the platform."""
    video_id: str
    total_views: int
    title: str = ""
    playlists: list[PlaylistMembership] = field(default_factory=list)


@dataclass
class PlaylistSummary:
    playlist_id: str
    title: str = ""
    item_count: int | None = None
