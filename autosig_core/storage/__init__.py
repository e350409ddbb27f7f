# autosig_core/storage/__init__.py

from .models import CacheLookup, ExpirySchedule
from .provider import StorageProvider
from .providers.memory_provider import InMemoryStorage
from .providers.sqlite_provider import SQLiteStorage
from .kvs import KeyValueStore
import os


def load_storage_provider(config: dict | None = None, capabilities=None) -> StorageProvider:
    """
    Factory resolver for selecting the storage backend, once at startup.

        - sqlite: durable, used when the host offers durable storage
        - memory: ephemeral fallback

    An explicit ``provider`` in config (or AUTOSIG_STORAGE_PROVIDER) wins over
    the capability probe.
    """
    config = config or {}
    provider = config.get("provider") or os.getenv("AUTOSIG_STORAGE_PROVIDER", "auto")

    if provider == "auto":
        durable = bool(capabilities and capabilities.durable_storage)
        provider = "sqlite" if durable else "memory"

    if provider == "memory":
        return InMemoryStorage()

    if provider == "sqlite":
        db_path = config.get("sqlite_path") or os.getenv("AUTOSIG_DB_PATH", "db/autosig_state.db")
        return SQLiteStorage(db_path)

    raise ValueError(f"Unknown storage provider: {provider}")


__all__ = [
    "CacheLookup",
    "ExpirySchedule",
    "StorageProvider",
    "InMemoryStorage",
    "SQLiteStorage",
    "KeyValueStore",
    "load_storage_provider",
]
