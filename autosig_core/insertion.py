# autosig_core/insertion.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, List, Tuple
from autosig_core.capabilities import HostCapabilities
from autosig_core.constants import SELECTED_CONTENT_LIMIT, SIGNATURE_API_LIMIT, AttachmentType
from autosig_core.errors import AttachmentError, SignatureTooLargeError
from autosig_core.host import MailHost
from autosig_core.logger import get_logger
from autosig_core.notifications import NotificationManager
from autosig_core.signature import ImageRef, Present, coerce_signature
from autosig_core.utils import to_absolute_url

log = get_logger("autosig.insertion")


@dataclass(frozen=True)
class InsertionMethod:
    name: str
    limit: int
    dedicated: bool   # setSignature rather than setSelectedContent


SIGNATURE_API = InsertionMethod("set_signature", SIGNATURE_API_LIMIT, True)
SELECTED_CONTENT = InsertionMethod("set_selected_content", SELECTED_CONTENT_LIMIT, False)


class InsertionDispatcher:
    """
    Puts a resolved signature into the compose item.

    Inline images are attached first, one at a time, newest first; the content
    is only inserted once every image is attached. Content over the method's
    size limit is refused, never truncated.
    """

    def __init__(
        self,
        host: MailHost,
        capabilities: HostCapabilities,
        notifications: NotificationManager,
        translate: Callable[..., str],
        base_url: str = "",
        prevent_duplicate: bool = True,
    ):
        self.host = host
        self.capabilities = capabilities
        self.notifications = notifications
        self.translate = translate
        self.base_url = base_url
        self.prevent_duplicate = prevent_duplicate

    def method(self) -> InsertionMethod:
        return SIGNATURE_API if self.capabilities.set_signature else SELECTED_CONTENT

    def prepare(self, signature: Present) -> Tuple[InsertionMethod, str]:
        method = self.method()
        content = signature.content or ""
        if not method.dedicated:
            content = f"<br />{content}<br />"
        if len(content) > method.limit:
            raise SignatureTooLargeError(len(content), method.limit)
        return method, content

    async def insert(self, signature: Any) -> bool:
        signature = coerce_signature(signature)
        if not signature.is_present:
            log.warning(f"[INSERT] invalid signature: {signature.reason}")
            await self.notifications.show_success(self.translate("signature.invalid"), show_task_pane=True)
            return False

        try:
            method, content = self.prepare(signature)
        except SignatureTooLargeError as e:
            log.error(f"[INSERT] {e}")
            await self.notifications.show_error(self.translate("signature.tooLarge", e.length, e.limit))
            return False

        try:
            await self.attach_images(list(signature.images))
        except AttachmentError as e:
            self.report_error(e.reason)
            return False

        if method.dedicated:
            result = await self.host.set_signature(content)
        else:
            result = await self.host.set_selected_content(content)

        if not result.ok:
            self.report_error(result.error)
            return False

        log.info(f"[INSERT] inserted {len(content)} characters via {method.name}")
        return True

    async def attach_images(self, pending: List[ImageRef]) -> None:
        while pending:
            await self.add_attachment(pending.pop())

    async def add_attachment(self, image: ImageRef) -> None:
        kind, data = self._transfer(image)
        if data is None:
            raise AttachmentError(image.id, "image has neither data nor url")

        if self.prevent_duplicate and self.attachment_exists(image.id):
            raise AttachmentError(image.id, "an attachment with this name already exists")

        result = await self.host.add_attachment(kind, data, image.id, is_inline=True)
        if not result.ok:
            if kind is AttachmentType.URL and "://localhost" in data:
                raise AttachmentError(image.id, self.translate("attachment.localhostUrl"))
            raise AttachmentError(image.id, result.error or self.translate("errors.unknown"))

        log.debug(f"[INSERT] attached {image.id} as {kind.name.lower()}")

    def attachment_exists(self, name: str) -> bool:
        return any(a.get("name") == name for a in self.host.list_attachments() or [])

    def _transfer(self, image: ImageRef):
        if self.capabilities.base64_attachments and image.data:
            return AttachmentType.CID, image.data
        if image.url:
            return AttachmentType.URL, to_absolute_url(image.url, self.base_url)
        return AttachmentType.URL, None

    def report_error(self, error) -> None:
        log.error(f"[INSERT] {error or self.translate('errors.unknown')}")
