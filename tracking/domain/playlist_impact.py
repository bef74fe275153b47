from dataclasses import dataclass


@dataclass
class PlaylistImpact:
    """
    Estimated share of a video's view growth attributable to one playlist.
    Derived on every query, never persisted.
    """
    playlist_id: str
    playlist_title: str
    views_contribution: float = 0.0
    contribution_percentage: float = 0.0
    days_in_playlist: int = 0
