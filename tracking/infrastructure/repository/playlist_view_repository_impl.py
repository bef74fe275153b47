import json
import logging

from tracking.application.port.key_value_store_port import KeyValueStorePort
from tracking.application.port.playlist_view_repository_port import PlaylistViewRepositoryPort

logger = logging.getLogger(__name__)

KEY_PREFIX = "youtube_analytics_data_"


class KeyValuePlaylistViewRepository(PlaylistViewRepositoryPort):
    """{playlistId: {"views": int, "lastUpdate": iso8601}} stored per video."""

    def __init__(self, store: KeyValueStorePort):
        self.store = store

    def load_counters(self, video_id: str) -> dict[str, dict]:
        try:
            raw = self.store.get(KEY_PREFIX + video_id)
            data = json.loads(raw) if raw else {}
            if not isinstance(data, dict):
                raise ValueError(f"expected an object, got {type(data).__name__}")
            return data
        except Exception:
            logger.exception("Error loading playlist view counters for video %s", video_id)
            return {}

    def save_counters(self, video_id: str, counters: dict[str, dict]) -> None:
        try:
            self.store.set(KEY_PREFIX + video_id, json.dumps(counters, ensure_ascii=False))
        except Exception:
            logger.exception("Error saving playlist view counters for video %s", video_id)
