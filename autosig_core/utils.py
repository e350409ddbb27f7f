"""
autosig_core.utils
------------------
Lightweight helpers for timestamps, lenient JSON encoding and string truncation.
Storage and roaming settings rely on the lenient codec so that a value which
cannot be represented as JSON is passed through unchanged instead of raising.
"""

from __future__ import annotations
import json, time
from typing import Any, Optional

ELLIPSIS = "…"


def now_ms() -> int:
    return int(time.time() * 1000)


def now_ts() -> str:
    # RFC3339 / ISO 8601 in UTC, second precision
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def format_ms(ms: int) -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(ms / 1000))


def days_to_ms(days: float) -> int:
    return int(days * 24 * 60 * 60 * 1000)


def encode_json(value: Any) -> Any:
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return value


def decode_json(value: Any) -> Any:
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        return value


def truncate(source: Any, limit: int) -> Optional[str]:
    """Cut ``source`` to ``limit`` characters, the last one replaced by an ellipsis."""
    if not isinstance(source, str):
        return None
    if len(source) <= limit:
        return source
    return source[: limit - 1] + ELLIPSIS


def to_absolute_url(url: Optional[str], base_url: str) -> Optional[str]:
    if not isinstance(url, str):
        return None
    if "://" in url:
        return url
    return f"{base_url.rstrip('/')}/{url.lstrip('/')}"
