# autosig_core/capabilities.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class HostCapabilities:
    """
    What the running mail client supports, probed once at startup.

    - set_signature: dedicated signature API (and client-signature toggling)
    - compose_type: the compose kind of the item can be queried
    - base64_attachments: attachments can be added from base64 bytes
    - durable_storage: a durable key-value store is available
    - delegated_auth: platform-issued access tokens work in this client
    """
    set_signature: bool = False
    compose_type: bool = False
    base64_attachments: bool = False
    durable_storage: bool = False
    delegated_auth: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HostCapabilities":
        return cls(
            set_signature=bool(data.get("set_signature", False)),
            # compose type querying ships together with the signature API
            compose_type=bool(data.get("compose_type", data.get("set_signature", False))),
            base64_attachments=bool(data.get("base64_attachments", False)),
            durable_storage=bool(data.get("durable_storage", False)),
            delegated_auth=bool(data.get("delegated_auth", False)),
        )

    @classmethod
    def probe(cls, host) -> "HostCapabilities":
        return cls.from_dict(host.capabilities() or {})
