# autosig_core/invalidation.py
from __future__ import annotations
from typing import Iterable, Optional
from autosig_core.constants import CLEAR_STORAGE_FLAG, NEW_SIGNATURE_KEY, REPLY_SIGNATURE_KEY
from autosig_core.host import RoamingSettings
from autosig_core.logger import get_logger
from autosig_core.storage.kvs import KeyValueStore

log = get_logger("autosig.invalidation")


class CacheInvalidationController:
    """
    Purges cached signatures when the task pane has flagged them stale, e.g.
    after the user switched language or employee record.

    The flag is removed only after the purge; if that step is lost the next
    check simply purges again.
    """

    def __init__(
        self,
        kvs: KeyValueStore,
        roaming: RoamingSettings,
        keys: Optional[Iterable[str]] = None,
        flag_key: str = CLEAR_STORAGE_FLAG,
    ):
        self.kvs = kvs
        self.roaming = roaming
        self.keys = list(keys) if keys is not None else [NEW_SIGNATURE_KEY, REPLY_SIGNATURE_KEY]
        self.flag_key = flag_key

    async def check_and_clear(self) -> bool:
        if not self.roaming.get(self.flag_key):
            return False

        log.info(f"[INVALIDATE] {self.flag_key} set, purging {', '.join(self.keys)}")
        await self.kvs.remove_many(self.keys)
        if not await self.roaming.remove(self.flag_key):
            log.warning(f"[INVALIDATE] could not clear {self.flag_key}, cache will be purged again")
        return True
