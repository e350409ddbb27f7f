# autosig_core/transport/transport_local.py
import inspect
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import urlsplit
from autosig_core.logger import get_logger
from autosig_core.transport.transport_base import BaseTransport, Headers, Response

log = get_logger("autosig.transport.local")

Route = Callable[..., Any]


class LocalAdapter(BaseTransport):
    """
    In-process transport. Handlers are registered per (method, path) and receive
    the request as keyword arguments; they may be plain functions or coroutines
    and may return a ``Response`` or a bare body (served as 200).
    Unregistered paths answer 404.
    """
    name = "local"

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Route] = {}
        self.requests = []

    def route(self, method: str, path: str, handler: Route) -> None:
        self.routes[(method.upper(), self._path(path))] = handler

    async def request(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]] = None,
        headers: Optional[Headers] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Response:
        method = method.upper()
        path = self._path(url)
        self.requests.append({"method": method, "path": path, "params": params or {}, "headers": headers or {}, "body": body})
        log.info(f"[LOCAL {method}] {path}")

        handler = self.routes.get((method, path))
        if handler is None:
            return Response(status=404, body=None, url=path)

        result = handler(params=params or {}, headers=headers or {}, body=body)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, Response):
            return result
        return Response(status=200, body=result, url=path)

    @staticmethod
    def _path(url: str) -> str:
        return "/" + urlsplit(url).path.lstrip("/")
