# autosig_core/transport/transport_http.py
import asyncio
import requests
from typing import Any, Dict, Optional
from autosig_core.logger import get_logger
from autosig_core.transport.transport_base import BaseTransport, Headers, Response, TransportTransientError

log = get_logger("autosig.transport.http")


class HTTPAdapter(BaseTransport):
    """
    HTTP transport for the signature server.

    Features:
    - JSON responses are parsed, anything else is returned as text.
    - Form-encoded request bodies, as the server's addin endpoints expect.
    - Optional default Bearer grant applied to every request.
    - Blocking ``requests`` calls run in a worker thread with a per-request timeout.
    """
    name = "http"

    def __init__(self, base_url: str, timeout: float = 5.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self._grant = None

    def set_grant(self, grant: Optional[str]):
        """Stores a default bearer token for subsequent requests."""
        self._grant = grant

    def url_for(self, path: str) -> str:
        if "://" in path:
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def request(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]] = None,
        headers: Optional[Headers] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Response:
        return await asyncio.to_thread(self._send, method, url, body, headers, params)

    def _send(self, method, url, body, headers, params) -> Response:
        full_url = self.url_for(url)
        merged = {"Accept": "application/json"}
        if self._grant:
            merged.update(self.bearer(self._grant))
        merged.update(headers or {})

        log.debug(f"[HTTP {method}] → {full_url}")
        try:
            res = self.session.request(
                method,
                full_url,
                params=params,
                data=body,
                headers=merged,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error(f"[HTTP {method}] {full_url} failed: {e}")
            raise TransportTransientError(str(e)) from e

        log.info(f"[HTTP {method}] {res.status_code} {res.reason} {full_url}")
        if not res.ok:
            log.error(f"[HTTP {method}] {res.status_code}: {res.text[:200]}")

        return Response(
            status=res.status_code,
            body=self._parse_body(res),
            headers=dict(res.headers),
            url=full_url,
        )

    @staticmethod
    def _parse_body(res: requests.Response) -> Any:
        if not res.content:
            return None
        try:
            return res.json()
        except ValueError:
            log.debug(f"[HTTP] non-JSON response body from {res.url}")
            return res.text

    def close(self) -> None:
        self.session.close()
