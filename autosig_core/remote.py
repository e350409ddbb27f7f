# autosig_core/remote.py
from __future__ import annotations
from typing import Any, Dict, Tuple
from autosig_core.capabilities import HostCapabilities
from autosig_core.constants import AttachmentType, ComposeKind
from autosig_core.errors import FetchError
from autosig_core.host import MailHost
from autosig_core.logger import get_logger
from autosig_core.signature import Signature, parse_signature
from autosig_core.transport.transport_base import BaseTransport

log = get_logger("autosig.remote")


def split_credential(credential: str) -> Tuple[str, str]:
    """``username:token`` → (username, token); a bare token has no username."""
    parts = (credential or "").split(":")
    if len(parts) > 1 and parts[1]:
        return parts[0], parts[1]
    return "", parts[0]


class SignatureSource:
    """Fetches the user's default signature from the signature server."""

    def __init__(self, transport: BaseTransport, host: MailHost, capabilities: HostCapabilities, path: str = "/addin/outlook/default"):
        self.transport = transport
        self.host = host
        self.capabilities = capabilities
        self.path = path

    def attachment_type(self) -> AttachmentType:
        # clients without base64 attachments can only attach images by url
        return AttachmentType.CID if self.capabilities.base64_attachments else AttachmentType.URL

    def build_params(self, kind: ComposeKind, credential: str) -> Dict[str, Any]:
        username, token = split_credential(credential)
        return {
            "attachmentType": int(self.attachment_type()),
            "composeKind": int(kind.normalized()),
            "credentialToken": token,
            "mailboxAddress": self.host.mailbox_address() or "",
            "username": username,
        }

    async def fetch(self, kind: ComposeKind, credential: str) -> Signature:
        """
        Returns the parsed signature (possibly ``Absent``) on a 2xx answer.
        Raises ``FetchError`` on any other status and lets transport errors through.
        """
        res = await self.transport.get(self.path, params=self.build_params(kind, credential))
        if not res.ok:
            raise FetchError(f"signature request answered {res.status}", status=res.status)

        signature = parse_signature(res.body)
        log.info(f"[FETCH] {kind.normalized().name.lower()} signature present={signature.is_present}")
        return signature
