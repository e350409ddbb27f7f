# autosig_core/errors.py
from __future__ import annotations
from typing import Optional


class AutosigError(Exception):
    pass


class CredentialError(AutosigError):
    """No session, delegated token or stored action-credential is available."""


class FetchError(AutosigError):
    """The signature endpoint answered, but not with a usable response."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class SignatureTooLargeError(AutosigError):
    def __init__(self, length: int, limit: int):
        super().__init__(f"signature length {length} exceeds limit {limit}")
        self.length = length
        self.limit = limit


class AttachmentError(AutosigError):
    def __init__(self, name: str, reason: str):
        super().__init__(f"attachment {name!r}: {reason}")
        self.name = name
        self.reason = reason
