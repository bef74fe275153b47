from pydantic import BaseModel, Field


class TakeSnapshotRequest(BaseModel):
    video: str = Field(min_length=1, description="Video id or YouTube URL")
    account_id: str | None = Field(default=None, description="Tracked account whose playlists are checked")
