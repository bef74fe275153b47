from account.application.usecase.account_usecase import AccountUseCase
from account.infrastructure.repository.account_repository_impl import AccountRepositoryImpl
from config.settings import TrackingSettings, YouTubeSettings
from tracking.application.port.key_value_store_port import KeyValueStorePort
from tracking.application.port.snapshot_repository_port import SnapshotRepositoryPort
from tracking.application.port.video_stats_port import VideoStatsPort
from tracking.application.usecase.export_usecase import ExportUseCase
from tracking.application.usecase.impact_query_usecase import ImpactQueryUseCase
from tracking.application.usecase.playlist_view_usecase import PlaylistViewUseCase
from tracking.application.usecase.snapshot_usecase import SnapshotUseCase
from tracking.infrastructure.client.youtube_client import YouTubeClient
from tracking.infrastructure.repository.playlist_view_repository_impl import KeyValuePlaylistViewRepository
from tracking.infrastructure.repository.snapshot_repository_impl import KeyValueSnapshotRepository
from tracking.infrastructure.store.sql_key_value_store import SqlKeyValueStore

# One store, one snapshot map and one client per process, created on first use so that
# environment variables loaded late are still honoured. Tests replace these through
# app.dependency_overrides.
_store: KeyValueStorePort | None = None
_snapshot_repository: SnapshotRepositoryPort | None = None
_client: VideoStatsPort | None = None


def get_key_value_store() -> KeyValueStorePort:
    global _store
    if _store is None:
        _store = SqlKeyValueStore()
    return _store


def get_snapshot_repository() -> SnapshotRepositoryPort:
    global _snapshot_repository
    if _snapshot_repository is None:
        _snapshot_repository = KeyValueSnapshotRepository(get_key_value_store())
    return _snapshot_repository


def get_account_usecase() -> AccountUseCase:
    return AccountUseCase(AccountRepositoryImpl(get_key_value_store()))


def get_video_stats_client() -> VideoStatsPort:
    global _client
    if _client is None:
        _client = YouTubeClient(YouTubeSettings(), AccountRepositoryImpl(get_key_value_store()))
    return _client


def get_snapshot_usecase() -> SnapshotUseCase:
    settings = TrackingSettings()
    return SnapshotUseCase(
        get_snapshot_repository(),
        get_video_stats_client(),
        AccountRepositoryImpl(get_key_value_store()),
        video_delay_seconds=settings.video_delay_seconds,
        account_delay_seconds=settings.account_delay_seconds,
    )


def get_impact_query_usecase() -> ImpactQueryUseCase:
    return ImpactQueryUseCase(get_snapshot_repository())


def get_playlist_view_usecase() -> PlaylistViewUseCase:
    return PlaylistViewUseCase(KeyValuePlaylistViewRepository(get_key_value_store()), get_snapshot_repository())


def get_export_usecase() -> ExportUseCase:
    return ExportUseCase(get_impact_query_usecase(), get_playlist_view_usecase())
