import json
import logging
from typing import List, Optional

from account.application.port.account_repository_port import AccountRepositoryPort
from account.domain.account import TrackedAccount
from tracking.application.port.key_value_store_port import KeyValueStorePort

logger = logging.getLogger(__name__)

ACCOUNTS_KEY = "youtube_analyzer_accounts"


class AccountRepositoryImpl(AccountRepositoryPort):
    """Tracked accounts as a JSON list under a single key, in registration order."""

    def __init__(self, store: KeyValueStorePort):
        self.store = store

    def save(self, account: TrackedAccount) -> TrackedAccount:
        accounts = self._load()
        for index, existing in enumerate(accounts):
            if existing.account_id == account.account_id:
                accounts[index] = account
                break
        else:
            accounts.append(account)
        self._write(accounts)
        return account

    def find_by_id(self, account_id: str) -> Optional[TrackedAccount]:
        for account in self._read():
            if account.account_id == account_id:
                return account
        return None

    def find_all(self) -> List[TrackedAccount]:
        return self._read()

    def delete(self, account_id: str) -> None:
        accounts = [a for a in self._load() if a.account_id != account_id]
        self._write(accounts)

    def _load(self) -> List[TrackedAccount]:
        # store errors propagate so a failed read never replaces the stored list
        raw = self.store.get(ACCOUNTS_KEY)
        if not raw:
            return []
        try:
            return [TrackedAccount.from_dict(item) for item in json.loads(raw)]
        except (ValueError, TypeError, KeyError):
            logger.exception("Malformed tracked accounts document")
            return []

    def _read(self) -> List[TrackedAccount]:
        try:
            return self._load()
        except Exception:
            logger.exception("Error loading tracked accounts")
            return []

    def _write(self, accounts: List[TrackedAccount]) -> None:
        self.store.set(ACCOUNTS_KEY, json.dumps([a.to_dict() for a in accounts], ensure_ascii=False))
