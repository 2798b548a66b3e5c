"""Offline-first client: local store, device identity and the sync provider."""
from typing import Optional

from settracker.client.api import SetsApiClient, SyncError
from settracker.client.device import get_device_id
from settracker.client.provider import SetsProvider, SyncEvent, SyncWorker
from settracker.client.storage import LocalStore
from settracker.settings import Settings, get_settings

__all__ = [
    "LocalStore",
    "SetsApiClient",
    "SetsProvider",
    "SyncError",
    "SyncEvent",
    "SyncWorker",
    "build_provider",
    "get_device_id",
]


def build_provider(settings: Optional[Settings] = None) -> tuple[SetsProvider, SyncWorker]:
    """Wire a provider and its (unstarted) background worker from settings."""
    settings = settings or get_settings()
    store = LocalStore(settings.LOCAL_STORE_PATH)
    api = SetsApiClient(settings.API_BASE_URL, device_id=get_device_id(store))
    provider = SetsProvider(api, store)
    return provider, SyncWorker(provider, retry_seconds=settings.SYNC_RETRY_SECONDS)
