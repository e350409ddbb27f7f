"""
autosig_core.notifications
--------------------------
User-visible status messages on the compose item.

The host offers a handful of notification slots per item. Slots are handed out
round robin from a fixed ring (``notification_0`` .. ``notification_4``); once
the ring wraps, the oldest slot is overwritten. Slot bookkeeping sits behind a
lock so overlapping compose events cannot hand out the same position twice.
"""

from __future__ import annotations
import threading
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from autosig_core.constants import NOTIFICATION_CAPACITY, NOTIFICATION_MAX_LENGTH
from autosig_core.logger import get_logger
from autosig_core.utils import truncate

log = get_logger("autosig.notifications")


class NotificationKind(str, Enum):
    INFORMATIONAL = "informationalMessage"
    ERROR = "errorMessage"
    INSIGHT = "insightMessage"   # the only kind that may carry actions


class SlotRing:
    def __init__(self, capacity: int = NOTIFICATION_CAPACITY, prefix: str = "notification_"):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self.prefix = prefix
        self._next = 0
        self._tracked: List[str] = []
        self._lock = threading.Lock()

    def allocate(self) -> str:
        with self._lock:
            key = f"{self.prefix}{self._next}"
            self._next = (self._next + 1) % self.capacity
            if key in self._tracked:
                self._tracked.remove(key)
            self._tracked.append(key)
            return key

    def release(self, key: str) -> bool:
        with self._lock:
            if key not in self._tracked:
                return False
            self._tracked.remove(key)
            return True

    def tracked(self) -> List[str]:
        with self._lock:
            return list(self._tracked)


class NotificationManager:
    def __init__(
        self,
        host,
        translate: Callable[..., str],
        capacity: int = NOTIFICATION_CAPACITY,
        max_length: int = NOTIFICATION_MAX_LENGTH,
        icon: str = "autosig.tpicon_32x32",
        taskpane_command_id: str = "autosig.TaskpaneButton",
    ):
        self.host = host
        self.translate = translate
        self.ring = SlotRing(capacity)
        self.max_length = max_length
        self.icon = icon
        self.taskpane_command_id = taskpane_command_id

    def build_details(
        self,
        message: Optional[str],
        kind: NotificationKind = NotificationKind.INFORMATIONAL,
        show_task_pane: bool = False,
        persistent: Optional[bool] = None,
    ) -> Dict[str, Any]:
        details: Dict[str, Any] = {
            "type": NotificationKind(kind).value,
            "message": truncate(message or "", self.max_length),
        }

        if show_task_pane:
            details["actions"] = [{
                "actionText": self.translate("notification.showTaskPane"),
                "actionType": "showTaskPane",
                "commandId": self.taskpane_command_id,
            }]
            details["type"] = NotificationKind.INSIGHT.value

        if details["type"] in (NotificationKind.INFORMATIONAL.value, NotificationKind.INSIGHT.value):
            details["icon"] = self.icon

        if details["type"] == NotificationKind.INFORMATIONAL.value:
            details["persistent"] = bool(persistent) if persistent is not None else False

        return details

    async def show(
        self,
        message: Optional[str],
        kind: NotificationKind = NotificationKind.INFORMATIONAL,
        show_task_pane: bool = False,
        persistent: Optional[bool] = None,
    ) -> str:
        details = self.build_details(message, kind, show_task_pane, persistent)
        key = self.ring.allocate()

        result = await self.host.show_notification(key, details)
        if not result.ok:
            log.error(f"[NOTIFY] {key} could not be shown: {result.error}")
        else:
            log.debug(f"[NOTIFY] {key} {details['type']}: {details['message']}")
        return key

    async def close(self, key: Optional[str]) -> bool:
        if not key or not self.ring.release(key):
            return False
        result = await self.host.clear_notification(key)
        if not result.ok:
            log.error(f"[NOTIFY] {key} could not be cleared: {result.error}")
        return True

    async def show_success(self, message: str, show_task_pane: bool = True) -> str:
        return await self.show(message, NotificationKind.INFORMATIONAL, show_task_pane=show_task_pane)

    async def show_error(self, message: str, show_task_pane: bool = True) -> str:
        return await self.show(message, NotificationKind.ERROR, show_task_pane=show_task_pane)
