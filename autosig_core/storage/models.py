# autosig_core/storage/models.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class ExpirySchedule:
    """
    Expiry metadata stored next to a value under ``<key>_Expires``.

    Timestamps are epoch milliseconds. A soft-expiring entry stays readable
    after ``expires`` so it can serve as a fallback.
    """
    created: int
    expires: int
    softExpire: bool = False

    def is_expired(self, now: int) -> bool:
        return self.expires < now

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> Optional["ExpirySchedule"]:
        # a malformed schedule counts as no schedule at all
        if not isinstance(data, dict):
            return None
        try:
            created = int(data.get("created", 0))
            expires = int(data["expires"])
        except (KeyError, TypeError, ValueError):
            return None
        return cls(created=created, expires=max(expires, created), softExpire=bool(data.get("softExpire", False)))


@dataclass
class CacheLookup:
    value: Any = None
    expired: bool = False
    schedule: Optional[ExpirySchedule] = None

    @property
    def found(self) -> bool:
        return self.value is not None
