import json
import logging
import threading

from tracking.application.port.key_value_store_port import KeyValueStorePort
from tracking.application.port.snapshot_repository_port import SnapshotRepositoryPort
from tracking.domain.video_snapshot import VideoSnapshot

logger = logging.getLogger(__name__)

STORAGE_KEY = "video_tracking_snapshots"


class KeyValueSnapshotRepository(SnapshotRepositoryPort):
    """
    Keeps every video's snapshots in memory and writes the whole map back to the
    key-value store as one JSON document after each change.

    Storage failures are logged and never raised. A malformed document reads as empty.
    When the store itself could not be read, the document is left untouched: the read
    is retried before the next write and writes are held back until it succeeds.
    """

    def __init__(self, store: KeyValueStorePort, storage_key: str = STORAGE_KEY):
        self.store = store
        self.storage_key = storage_key
        self.snapshots: dict[str, list[VideoSnapshot]] = {}
        self.loaded = False
        # the snapshot run and the web handlers share one instance across threads
        self._lock = threading.RLock()
        self.load()

    def load(self) -> None:
        with self._lock:
            try:
                raw = self.store.get(self.storage_key)
            except Exception:
                logger.exception("Error loading snapshots from key %s", self.storage_key)
                self.loaded = False
                return

            self.loaded = True
            if not raw:
                self.snapshots = {}
                return
            try:
                payload = json.loads(raw)
                if not isinstance(payload, dict):
                    raise ValueError(f"expected an object, got {type(payload).__name__}")
                self.snapshots = {
                    str(video_id): [VideoSnapshot.from_dict(item) for item in items]
                    for video_id, items in payload.items()
                }
                logger.info("Loaded snapshots for %d videos", len(self.snapshots))
            except Exception:
                logger.exception("Error loading snapshots from key %s", self.storage_key)
                self.snapshots = {}

    def save(self) -> None:
        with self._lock:
            if not self._ensure_loaded():
                logger.warning(
                    "Snapshots not saved: key %s could not be read, keeping changes in memory",
                    self.storage_key,
                )
                return
            try:
                payload = {
                    video_id: [s.to_dict() for s in items] for video_id, items in self.snapshots.items()
                }
                self.store.set(self.storage_key, json.dumps(payload, ensure_ascii=False))
            except Exception:
                logger.exception("Error saving snapshots to key %s", self.storage_key)

    def append_or_replace(self, snapshot: VideoSnapshot) -> VideoSnapshot:
        with self._lock:
            self._put(snapshot)
            self.save()
        return snapshot

    def get_snapshots(self, video_id: str) -> list[VideoSnapshot]:
        with self._lock:
            return list(self.snapshots.get(video_id, []))

    def clear(self, video_id: str) -> None:
        with self._lock:
            self._ensure_loaded()
            if self.snapshots.pop(video_id, None) is not None:
                self.save()

    def video_ids(self) -> list[str]:
        with self._lock:
            return [video_id for video_id, items in self.snapshots.items() if items]

    def _put(self, snapshot: VideoSnapshot) -> None:
        items = self.snapshots.setdefault(snapshot.video_id, [])
        for index, existing in enumerate(items):
            if existing.date == snapshot.date:
                items[index] = snapshot
                return
        items.append(snapshot)

    def _ensure_loaded(self) -> bool:
        if self.loaded:
            return True
        pending = [s for items in self.snapshots.values() for s in items]
        self.load()
        if not self.loaded:
            return False
        # replay what was recorded while the store was unreadable
        for snapshot in pending:
            self._put(snapshot)
        return True
