# autosig_core/storage/provider.py
from __future__ import annotations
from typing import Any, Iterable, Optional


class StorageProvider:
    """Physical key-value backend. Values are stored as given (normally JSON text)."""
    name: str = "base"

    # Interface
    async def get_item(self, key: str) -> Optional[Any]: ...
    async def set_item(self, key: str, value: Any) -> None: ...
    async def remove_item(self, key: str) -> None: ...
    async def remove_items(self, keys: Iterable[str]) -> None: ...

    def close(self) -> None:
        return
