from __future__ import annotations
from typing import Any, Iterable, List, Optional
import asyncio, os, sqlite3, threading
from autosig_core.logger import get_logger
from autosig_core.storage.provider import StorageProvider
from autosig_core.utils import now_ts

log = get_logger("autosig.storage.sqlite")


class SQLiteStorage(StorageProvider):
    """Durable backend: one ``kv_store`` table, values kept as text."""
    name = "sqlite"

    def __init__(self, path="db/autosig_state.db"):
        # If no directory, default to current working directory
        dir_path = os.path.dirname(path) or "."
        os.makedirs(dir_path, exist_ok=True)
        self.db = sqlite3.connect(path, check_same_thread=False)
        self._lock = threading.Lock()

        self._init()

    def _init(self) -> None:
        self.db.execute("""CREATE TABLE IF NOT EXISTS kv_store(
            key TEXT PRIMARY KEY,
            value TEXT,
            updated_at TEXT NOT NULL
        )""")
        self.db.commit()

    # sqlite calls run in a worker thread, the lock serialises them on the shared connection
    async def get_item(self, key: str) -> Optional[Any]:
        return await asyncio.to_thread(self._get, key)

    async def set_item(self, key: str, value: Any) -> None:
        if value is not None and not isinstance(value, str):
            # values that did not survive JSON encoding are kept in their text form
            log.warning(f"[SQLITE] storing non-text value for {key} as str")
            value = str(value)
        await asyncio.to_thread(self._set, key, value)

    async def remove_item(self, key: str) -> None:
        await self.remove_items([key])

    async def remove_items(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if keys:
            await asyncio.to_thread(self._remove, keys)

    def _get(self, key: str) -> Optional[str]:
        with self._lock:
            cur = self.db.execute("SELECT value FROM kv_store WHERE key=?", (key,))
            row = cur.fetchone()
        if not row:
            return None
        return row[0]

    def _set(self, key: str, value: Optional[str]) -> None:
        with self._lock:
            self.db.execute(
                "INSERT INTO kv_store(key,value,updated_at) VALUES(?,?,?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at",
                (key, value, now_ts())
            )
            self.db.commit()

    def _remove(self, keys: List[str]) -> None:
        with self._lock:
            # one transaction, so a value and its expiry key disappear together
            self.db.executemany("DELETE FROM kv_store WHERE key=?", [(k,) for k in keys])
            self.db.commit()

    def list_keys(self):
        with self._lock:
            cur = self.db.execute("SELECT key FROM kv_store ORDER BY key")
            return [r[0] for r in cur.fetchall()]

    def close(self):
        self.db.close()
