from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

Headers = Dict[str, str]


class TransportError(Exception):
    pass


class TransportTransientError(TransportError):
    """Network failure or timeout; the request may succeed later."""
    pass


@dataclass
class Response:
    status: int
    body: Any = None
    headers: Headers = field(default_factory=dict)
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class BaseTransport:
    """
    Request contract used by the credential resolver and the signature source.

    ``request`` resolves to a ``Response`` for every HTTP status and raises
    ``TransportTransientError`` only when no response was received at all.
    """
    name: str = "base"

    async def request(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]] = None,
        headers: Optional[Headers] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Response:
        raise NotImplementedError

    async def get(self, url: str, headers: Optional[Headers] = None, params: Optional[Dict[str, Any]] = None) -> Response:
        return await self.request("GET", url, headers=headers, params=params)

    async def post(self, url: str, body: Optional[Dict[str, Any]] = None, headers: Optional[Headers] = None) -> Response:
        return await self.request("POST", url, body=body, headers=headers)

    def healthz(self) -> dict:
        return {"status": "ok", "transport": self.name}

    def close(self) -> None:
        return

    # ---------------------------
    # Helpers
    # ---------------------------
    @staticmethod
    def bearer(token: str) -> Headers:
        return {"Authorization": f"Bearer {token}"}
