from typing import Optional, List
from abc import ABC, abstractmethod
from account.domain.account import TrackedAccount

class AccountRepositoryPort(ABC):

    @abstractmethod
    def save(self, account: TrackedAccount) -> TrackedAccount:
        pass

    @abstractmethod
    def find_by_id(self, account_id: str) -> Optional[TrackedAccount]:
        pass

    @abstractmethod
    def find_all(self) -> List[TrackedAccount]:
        pass

    @abstractmethod
    def delete(self, account_id: str) -> None:
        pass
