from typing import Any, Dict, Iterable, Optional
from autosig_core.storage.provider import StorageProvider


class InMemoryStorage(StorageProvider):
    """Ephemeral backend for clients without durable storage; lost on restart."""
    name = "memory"

    def __init__(self):
        self.items: Dict[str, Any] = {}

    async def get_item(self, key: str) -> Optional[Any]:
        return self.items.get(key)

    async def set_item(self, key: str, value: Any) -> None:
        self.items[key] = value

    async def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    async def remove_items(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.items.pop(key, None)
