from abc import ABC, abstractmethod
from typing import Optional

from tracking.domain.video_stats import PlaylistSummary, VideoStats


class VideoStatsPort(ABC):
    platform: str

    @abstractmethod
    def list_playlists(self, account_id: Optional[str] = None) -> list[PlaylistSummary]:
        raise NotImplementedError

    @abstractmethod
    def list_playlist_video_ids(self, playlist_id: str, account_id: Optional[str] = None) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def fetch_video_stats(self, video_id: str, account_id: Optional[str] = None) -> Optional[VideoStats]:
        """Returns None when the platform does not know the video."""
        raise NotImplementedError
