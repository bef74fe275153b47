from dataclasses import dataclass
from datetime import datetime


@dataclass
class PlaylistViewEstimate:
    playlist_id: str
    playlist_title: str
    estimated_views: int
    percentage: float
    last_update: datetime | None = None
