import logging
import re
import time
from typing import List, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from account.application.port.account_repository_port import AccountRepositoryPort
from config.settings import YouTubeSettings
from tracking.application.port.video_stats_port import VideoStatsPort
from tracking.domain.video_snapshot import PlaylistMembership
from tracking.domain.video_stats import PlaylistSummary, VideoStats

logger = logging.getLogger(__name__)

PAGE_SIZE = 50

_VIDEO_URL_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/)([^&?#/]+)"),
    re.compile(r"youtube\.com/shorts/([^&?#/]+)"),
]


def extract_video_id(value: str) -> str | None:
    """Accepts a bare video id or any of the common watch/share/embed/shorts URLs."""
    if not value:
        return None
    ident = value.strip()
    for pattern in _VIDEO_URL_PATTERNS:
        match = pattern.search(ident)
        if match:
            return match.group(1)
    if "/" in ident or "?" in ident or " " in ident:
        return None
    return ident


class YouTubeClient(VideoStatsPort):
    platform = "youtube"

    def __init__(
        self,
        settings: YouTubeSettings,
        account_repository: AccountRepositoryPort | None = None,
        service_builder=build,
        clock=time.monotonic,
    ):
        self.settings = settings
        self.account_repository = account_repository
        self._service_builder = service_builder
        self._clock = clock
        self._services: dict[tuple, object] = {}
        # (account_id, playlist_id) -> (fetched_at, video ids)
        self._playlist_items_cache: dict[tuple, tuple[float, List[str]]] = {}
        # account_id -> (fetched_at, playlists); refreshed by every list_playlists call
        self._playlists_cache: dict[Optional[str], tuple[float, list[PlaylistSummary]]] = {}

    def list_playlists(self, account_id: Optional[str] = None) -> list[PlaylistSummary]:
        token, channel_id = self._credentials_for(account_id)
        service = self._service(account_id, token)
        params = {"part": "snippet,contentDetails", "maxResults": PAGE_SIZE}
        if token:
            params["mine"] = True
        elif channel_id:
            params["channelId"] = channel_id
        else:
            raise ValueError("Account has neither an access token nor a channel id")

        playlists: list[PlaylistSummary] = []
        page_token = None
        while True:
            if page_token:
                params["pageToken"] = page_token
            try:
                response = service.playlists().list(**params).execute()
            except HttpError as exc:
                raise RuntimeError(f"YouTube playlists fetch failed: {exc}") from exc

            for item in response.get("items", []):
                playlists.append(
                    PlaylistSummary(
                        playlist_id=item["id"],
                        title=(item.get("snippet") or {}).get("title", ""),
                        item_count=(item.get("contentDetails") or {}).get("itemCount"),
                    )
                )
            page_token = response.get("nextPageToken")
            if not page_token:
                break
        self._playlists_cache[account_id] = (self._clock(), list(playlists))
        return playlists

    def list_playlist_video_ids(self, playlist_id: str, account_id: Optional[str] = None) -> list[str]:
        cache_key = (account_id, playlist_id)
        cached = self._playlist_items_cache.get(cache_key)
        if cached and self._clock() - cached[0] < self.settings.playlist_cache_hours * 3600:
            return list(cached[1])

        token, _ = self._credentials_for(account_id)
        service = self._service(account_id, token)
        ids: List[str] = []
        page_token = None
        while True:
            params = {"part": "contentDetails", "playlistId": playlist_id, "maxResults": PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token
            try:
                response = service.playlistItems().list(**params).execute()
            except HttpError as exc:
                raise RuntimeError(f"YouTube playlist items fetch failed: {exc}") from exc

            for item in response.get("items", []):
                video_id = (item.get("contentDetails") or {}).get("videoId")
                if video_id:
                    ids.append(video_id)
            page_token = response.get("nextPageToken")
            if not page_token:
                break

        self._playlist_items_cache[cache_key] = (self._clock(), ids)
        return list(ids)

    def fetch_video_stats(self, video_id: str, account_id: Optional[str] = None) -> Optional[VideoStats]:
        token, _ = self._credentials_for(account_id)
        service = self._service(account_id, token)
        try:
            response = service.videos().list(part="snippet,statistics", id=video_id).execute()
        except HttpError as exc:
            raise RuntimeError(f"YouTube video fetch failed: {exc}") from exc

        items = response.get("items", [])
        if not items:
            return None
        snippet = items[0].get("snippet", {})
        stats = items[0].get("statistics", {})

        return VideoStats(
            video_id=items[0]["id"],
            total_views=int(stats.get("viewCount", 0) or 0),
            title=snippet.get("title", ""),
            playlists=self._memberships_for(video_id, account_id),
        )

    def _memberships_for(self, video_id: str, account_id: Optional[str]) -> list[PlaylistMembership]:
        memberships: list[PlaylistMembership] = []
        for playlist in self._known_playlists(account_id):
            try:
                video_ids = self.list_playlist_video_ids(playlist.playlist_id, account_id)
            except RuntimeError:
                logger.exception("Error checking playlist %s for video %s", playlist.playlist_id, video_id)
                continue
            if video_id in video_ids:
                memberships.append(PlaylistMembership(playlist.playlist_id, playlist.title))
        return memberships

    def _known_playlists(self, account_id: Optional[str]) -> list[PlaylistSummary]:
        cached = self._playlists_cache.get(account_id)
        if cached and self._clock() - cached[0] < self.settings.playlist_cache_hours * 3600:
            return list(cached[1])
        return self.list_playlists(account_id)

    def _credentials_for(self, account_id: Optional[str]) -> tuple[str | None, str | None]:
        if account_id is None:
            return self.settings.access_token, self.settings.channel_id
        account = self.account_repository.find_by_id(account_id) if self.account_repository else None
        if account is None:
            raise ValueError(f"Unknown account: {account_id}")
        return account.access_token, account.channel_id

    def _service(self, account_id: Optional[str], token: str | None):
        key = (account_id, token)
        service = self._services.get(key)
        if service is not None:
            return service

        if token:
            service = self._service_builder(
                "youtube",
                "v3",
                credentials=Credentials(token=token),
                cache_discovery=False,
            )
        else:
            if not self.settings.api_key:
                raise RuntimeError("Missing YOUTUBE_API_KEY")
            service = self._service_builder(
                "youtube",
                "v3",
                developerKey=self.settings.api_key,
                cache_discovery=False,
            )
        self._services[key] = service
        return service
