"""
autosig_core.signature
----------------------
The signature payload exchanged between the cache, the remote endpoint and the
insertion dispatcher.

A resolved signature is either ``Present`` (content plus inline images) or
``Absent``. Cached and fetched payloads go through ``parse_signature``, which
only accepts a mapping carrying a ``content`` key. ``coerce_signature`` is the
lenient variant used right before insertion; it also takes bare markup and
legacy ``html`` payloads.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class ImageRef:
    id: str
    data: Optional[str] = None   # base64 bytes
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"id": self.id}
        if self.data is not None:
            d["data"] = self.data
        if self.url is not None:
            d["url"] = self.url
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["ImageRef"]:
        if not isinstance(data, dict) or not data.get("id"):
            return None
        return cls(id=str(data["id"]), data=data.get("data"), url=data.get("url"))


@dataclass(frozen=True)
class Present:
    content: str
    images: Tuple[ImageRef, ...] = field(default_factory=tuple)

    is_present: ClassVar[bool] = True

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"content": self.content}
        if self.images:
            d["images"] = [img.to_dict() for img in self.images]
        return d


@dataclass(frozen=True)
class Absent:
    reason: str = ""

    is_present: ClassVar[bool] = False


Signature = Union[Present, Absent]


def parse_signature(raw: Any) -> Signature:
    """Turn a cached or fetched payload into a tagged signature."""
    if isinstance(raw, (Present, Absent)):
        return raw
    if not isinstance(raw, dict):
        return Absent("no payload")
    if "content" not in raw:
        return Absent("missing content")
    return Present(content=str(raw["content"] or ""), images=_parse_images(raw.get("images")))


def coerce_signature(raw: Any) -> Signature:
    if isinstance(raw, str):
        return Present(content=raw)
    # some payloads carry the markup under "html" instead of "content"
    if isinstance(raw, dict) and isinstance(raw.get("html"), str):
        return Present(content=raw["html"], images=_parse_images(raw.get("images")))
    return parse_signature(raw)


def _parse_images(raw: Any) -> Tuple[ImageRef, ...]:
    if not isinstance(raw, list):
        return ()
    images: List[ImageRef] = []
    for item in raw:
        img = ImageRef.from_dict(item)
        if img is not None:
            images.append(img)
    return tuple(images)
