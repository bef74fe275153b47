from typing import List, Optional

from account.application.port.account_repository_port import AccountRepositoryPort
from account.domain.account import TrackedAccount


class AccountUseCase:
    def __init__(self, account_repository: AccountRepositoryPort):
        self.repo = account_repository

    def register_account(
        self,
        account_id: str,
        display_name: Optional[str] = None,
        access_token: Optional[str] = None,
        channel_id: Optional[str] = None,
    ) -> TrackedAccount:
        account = self.repo.find_by_id(account_id)
        if account:
            account.update(display_name=display_name, access_token=access_token, channel_id=channel_id)
            return self.repo.save(account)

        account = TrackedAccount(
            account_id=account_id,
            display_name=display_name,
            access_token=access_token,
            channel_id=channel_id,
        )
        return self.repo.save(account)

    def get_account(self, account_id: str) -> TrackedAccount:
        account = self.repo.find_by_id(account_id)
        if account is None:
            raise ValueError("Account not found")
        return account

    def list_accounts(self) -> List[TrackedAccount]:
        return self.repo.find_all()

    def update_account(
        self,
        account_id: str,
        display_name: Optional[str] = None,
        access_token: Optional[str] = None,
        channel_id: Optional[str] = None,
    ) -> TrackedAccount:
        account = self.get_account(account_id)
        account.update(display_name=display_name, access_token=access_token, channel_id=channel_id)
        return self.repo.save(account)

    def remove_account(self, account_id: str) -> None:
        self.get_account(account_id)
        self.repo.delete(account_id)
