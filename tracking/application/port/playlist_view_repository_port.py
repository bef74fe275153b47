from abc import ABC, abstractmethod


class PlaylistViewRepositoryPort(ABC):
    @abstractmethod
    def load_counters(self, video_id: str) -> dict[str, dict]:
        raise NotImplementedError

    @abstractmethod
    def save_counters(self, video_id: str, counters: dict[str, dict]) -> None:
        raise NotImplementedError
