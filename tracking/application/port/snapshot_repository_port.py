from abc import ABC, abstractmethod

from tracking.domain.video_snapshot import VideoSnapshot


class SnapshotRepositoryPort(ABC):
    @abstractmethod
    def load(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def save(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def append_or_replace(self, snapshot: VideoSnapshot) -> VideoSnapshot:
        raise NotImplementedError

    @abstractmethod
    def get_snapshots(self, video_id: str) -> list[VideoSnapshot]:
        raise NotImplementedError

    @abstractmethod
    def clear(self, video_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def video_ids(self) -> list[str]:
        raise NotImplementedError

    def record_snapshot(self, snapshot: VideoSnapshot) -> VideoSnapshot:
        return self.append_or_replace(snapshot)
