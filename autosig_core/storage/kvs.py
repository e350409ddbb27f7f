"""
autosig_core.storage.kvs
------------------------
Backend-agnostic key-value store with optional expiry.

Each entry occupies two physical keys: the value under ``key`` and its
``ExpirySchedule`` under ``key + "_Expires"``. Both are always removed in the
same backend call. A value without a schedule never expires; a schedule
without a value is simply an absent entry.
"""

from __future__ import annotations
from typing import Any, Callable, Iterable, List, Optional
from autosig_core.constants import EXPIRES_SUFFIX
from autosig_core.logger import get_logger
from autosig_core.storage.models import CacheLookup, ExpirySchedule
from autosig_core.storage.provider import StorageProvider
from autosig_core.utils import decode_json, encode_json, format_ms, now_ms

log = get_logger("autosig.storage.kvs")


def expiry_key(key: str) -> str:
    return key + EXPIRES_SUFFIX


class KeyValueStore:
    def __init__(self, provider: StorageProvider, clock: Callable[[], int] = now_ms):
        self.provider = provider
        self.clock = clock

    async def get(self, key: str) -> Optional[Any]:
        return (await self.lookup(key)).value

    async def lookup(self, key: str) -> CacheLookup:
        """
        Read ``key`` along with its expiry state.

        Hard-expired entries are purged and reported as missing. Soft-expired
        entries are returned with ``expired=True`` so callers can refresh first.
        """
        schedule = ExpirySchedule.from_dict(decode_json(await self.provider.get_item(expiry_key(key))))
        expired = False

        if schedule is not None and schedule.is_expired(self.clock()):
            expired = True
            if not schedule.softExpire:
                log.info(f"[KVS] item {key} expired on {format_ms(schedule.expires)}, purging")
                await self.remove(key)
                return CacheLookup(schedule=schedule, expired=True)
            log.info(f"[KVS] item {key} expired on {format_ms(schedule.expires)}, kept as fallback")

        value = decode_json(await self.provider.get_item(key))
        log.debug(f"[KVS] retrieved item {key} (found={value is not None}, expired={expired})")
        return CacheLookup(value=value, expired=expired, schedule=schedule)

    async def set(self, key: str, value: Any, expires_ms: Optional[int] = None, soft_expire: bool = False) -> None:
        if expires_ms is not None:
            now = self.clock()
            schedule = ExpirySchedule(created=now, expires=now + abs(int(expires_ms)), softExpire=soft_expire)
            await self.provider.set_item(expiry_key(key), encode_json(schedule.to_dict()))
            log.info(f"[KVS] stored item {key} (expires on {format_ms(schedule.expires)})")
        else:
            # a schedule left over from an earlier write must not apply to this value
            await self.provider.remove_item(expiry_key(key))
            log.info(f"[KVS] stored item {key}")

        await self.provider.set_item(key, encode_json(value))

    async def remove(self, key: str) -> None:
        await self.provider.remove_items([key, expiry_key(key)])
        log.info(f"[KVS] removed item {key}")

    async def remove_many(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        physical: List[str] = keys + [expiry_key(k) for k in keys]
        await self.provider.remove_items(physical)
        log.info(f"[KVS] removed items {', '.join(keys)}")
