from typing import Optional
from datetime import datetime, timezone


class TrackedAccount:
    def __init__(
        self,
        account_id: str,
        display_name: Optional[str] = None,
        access_token: Optional[str] = None,
        channel_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ):
        self.account_id = account_id
        self.display_name = display_name or account_id
        self.access_token = access_token
        self.channel_id = channel_id
        self.created_at: datetime = created_at or datetime.now(timezone.utc)
        self.updated_at: datetime = self.created_at

    def update(
        self,
        display_name: Optional[str] = None,
        access_token: Optional[str] = None,
        channel_id: Optional[str] = None,
    ):
        if display_name is not None:
            self.display_name = display_name
        if access_token is not None:
            self.access_token = access_token
        if channel_id is not None:
            self.channel_id = channel_id
        self.updated_at = datetime.now(timezone.utc)

    def to_dict(self) -> dict:
        return {
            "id": self.account_id,
            "displayName": self.display_name,
            "providerToken": self.access_token,
            "channelId": self.channel_id,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "TrackedAccount":
        created_at = payload.get("createdAt")
        account = cls(
            account_id=str(payload["id"]),
            display_name=payload.get("displayName"),
            access_token=payload.get("providerToken"),
            channel_id=payload.get("channelId"),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )
        updated_at = payload.get("updatedAt")
        if updated_at:
            account.updated_at = datetime.fromisoformat(updated_at)
        return account
