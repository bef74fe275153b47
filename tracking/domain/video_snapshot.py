from dataclasses import dataclass, field
from datetime import date
from typing import Iterable


@dataclass(frozen=True)
class PlaylistMembership:
    playlist_id: str
    playlist_title: str = ""

    def to_dict(self) -> dict:
        return {"playlistId": self.playlist_id, "playlistTitle": self.playlist_title}

    @classmethod
    def from_dict(cls, payload: dict) -> "PlaylistMembership":
        return cls(
            playlist_id=str(payload["playlistId"]),
            playlist_title=payload.get("playlistTitle") or "",
        )


@dataclass
class VideoSnapshot:
    """
    One observation of a video's total views and playlist memberships on a given day.
    The persisted form keeps the camelCase keys of the browser storage it replaces.
    """
    video_id: str
    date: date
    total_views: int
    title: str = ""
    playlists: list[PlaylistMembership] = field(default_factory=list)

    def __post_init__(self):
        self.playlists = unique_memberships(self.playlists)

    def to_dict(self) -> dict:
        return {
            "videoId": self.video_id,
            "date": self.date.isoformat(),
            "totalViews": self.total_views,
            "title": self.title,
            "playlists": [p.to_dict() for p in self.playlists],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "VideoSnapshot":
        return cls(
            video_id=str(payload["videoId"]),
            date=date.fromisoformat(payload["date"]),
            total_views=int(payload.get("totalViews") or 0),
            title=payload.get("title") or "",
            playlists=[PlaylistMembership.from_dict(p) for p in payload.get("playlists") or []],
        )


def unique_memberships(memberships: Iterable[PlaylistMembership]) -> list[PlaylistMembership]:
    """Collapses repeated playlist ids, keeping the first occurrence."""
    seen: set[str] = set()
    result: list[PlaylistMembership] = []
    for membership in memberships:
        if membership.playlist_id in seen:
            continue
        seen.add(membership.playlist_id)
        result.append(membership)
    return result
