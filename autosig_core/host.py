"""
autosig_core.host
-----------------
The mail-client surface the pipeline talks to.

Every asynchronous host call reports a ``HostResult`` instead of raising, the
way the client's own async APIs report a status. ``RoamingSettings`` layers the
lenient JSON codec over the host's per-user roaming settings.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
from autosig_core.constants import AttachmentType
from autosig_core.logger import get_logger
from autosig_core.utils import decode_json, encode_json

log = get_logger("autosig.host")


@dataclass
class HostResult:
    ok: bool
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> "HostResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "HostResult":
        return cls(ok=False, error=error)


class MailHost:
    # Interface
    def capabilities(self) -> Dict[str, Any]: ...
    def mailbox_address(self) -> str: ...
    def display_language(self) -> Optional[str]: ...

    async def get_compose_kind(self) -> HostResult: ...
    async def is_client_signature_enabled(self) -> HostResult: ...
    async def disable_client_signature(self) -> HostResult: ...
    async def set_signature(self, content: str) -> HostResult: ...
    async def set_selected_content(self, content: str) -> HostResult: ...

    async def add_attachment(self, kind: AttachmentType, data: str, name: str, is_inline: bool = True) -> HostResult: ...
    def list_attachments(self) -> List[Dict[str, Any]]: ...

    async def show_notification(self, key: str, details: Dict[str, Any]) -> HostResult: ...
    async def clear_notification(self, key: str) -> HostResult: ...

    def get_roaming_setting(self, key: str) -> Any: ...
    def set_roaming_setting(self, key: str, value: Any) -> None: ...
    def remove_roaming_setting(self, key: str) -> None: ...
    async def save_roaming_settings(self) -> HostResult: ...

    async def get_access_token(self) -> str:
        """Platform-issued access token; raises when none can be acquired."""
        ...


class RoamingSettings:
    def __init__(self, host: MailHost):
        self.host = host

    def get(self, key: str) -> Any:
        value = decode_json(self.host.get_roaming_setting(key))
        log.debug(f"[ROAMING] retrieved setting {key}")
        return value

    async def set(self, key: str, value: Any) -> bool:
        self.host.set_roaming_setting(key, encode_json(value))
        return await self._save(f"updated setting {key}")

    async def remove(self, key: str) -> bool:
        self.host.remove_roaming_setting(key)
        return await self._save(f"removed setting {key}")

    async def remove_many(self, keys: Iterable[str]) -> bool:
        keys = list(keys)
        for key in keys:
            self.host.remove_roaming_setting(key)
        return await self._save(f"removed settings {', '.join(keys)}")

    async def _save(self, what: str) -> bool:
        result = await self.host.save_roaming_settings()
        if result.ok:
            log.debug(f"[ROAMING] {what}")
        else:
            log.error(f"[ROAMING] save failed ({what}): {result.error}")
        return result.ok
