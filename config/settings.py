import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


@dataclass
class YouTubeSettings:
    api_key: str = field(default_factory=lambda: os.getenv("YOUTUBE_API_KEY", ""))
    channel_id: str | None = field(default_factory=lambda: os.getenv("YOUTUBE_CHANNEL_ID"))
    access_token: str | None = field(default_factory=lambda: os.getenv("YOUTUBE_ACCESS_TOKEN"))
    playlist_cache_hours: float = field(
        default_factory=lambda: float(os.getenv("YOUTUBE_PLAYLIST_CACHE_HOURS", "48"))
    )


@dataclass
class TrackingSettings:
    anchor_hour: int = field(default_factory=lambda: int(os.getenv("SNAPSHOT_ANCHOR_HOUR", "3")))
    anchor_minute: int = field(default_factory=lambda: int(os.getenv("SNAPSHOT_ANCHOR_MINUTE", "0")))
    video_delay_seconds: float = field(
        default_factory=lambda: float(os.getenv("SNAPSHOT_VIDEO_DELAY_SECONDS", "0.5"))
    )
    account_delay_seconds: float = field(
        default_factory=lambda: float(os.getenv("SNAPSHOT_ACCOUNT_DELAY_SECONDS", "1.0"))
    )
    check_interval_seconds: float = field(
        default_factory=lambda: float(os.getenv("SNAPSHOT_CHECK_INTERVAL_SECONDS", "60"))
    )
    batch_enabled: bool = field(
        default_factory=lambda: os.getenv("ENABLE_SNAPSHOT_BATCH", "false").lower() == "true"
    )
