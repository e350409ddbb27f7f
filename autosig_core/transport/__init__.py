# autosig_core/transport/__init__.py
import os
from autosig_core.transport.transport_base import (
    BaseTransport,
    Response,
    TransportError,
    TransportTransientError,
)
from autosig_core.transport.transport_local import LocalAdapter
from autosig_core.transport.transport_http import HTTPAdapter


def transport_factory(settings=None):
    """
    mode (settings.transport or AUTOSIG_TRANSPORT):
      - "http"  → signature server over HTTP (default)
      - "local" → in-process routes, for tests and offline runs
    """
    if settings is not None:
        mode = settings.transport
    else:
        mode = os.getenv("AUTOSIG_TRANSPORT", "http")
    mode = (mode or "http").lower()

    if mode == "http":
        base_url = settings.base_url if settings is not None else os.getenv("AUTOSIG_BASE_URL", "http://localhost:8080")
        timeout = settings.http_timeout if settings is not None else 5.0
        return HTTPAdapter(base_url, timeout=timeout)

    if mode == "local":
        return LocalAdapter()

    raise ValueError(f"Unknown transport: {mode}")


__all__ = [
    "BaseTransport",
    "Response",
    "TransportError",
    "TransportTransientError",
    "LocalAdapter",
    "HTTPAdapter",
    "transport_factory",
]
