# autosig_core/constants.py
from __future__ import annotations
from enum import IntEnum


NEW_SIGNATURE_KEY = "autosig.signatures.new"
REPLY_SIGNATURE_KEY = "autosig.signatures.reply"
CLEAR_STORAGE_FLAG = "autosig.signatures.clearStorage"
ACTION_CREDENTIAL_KEY = "actionCredentialToken"

EXPIRES_SUFFIX = "_Expires"

SIGNATURE_API_LIMIT = 30000         # setSignature
SELECTED_CONTENT_LIMIT = 1000000    # setSelectedContent

NOTIFICATION_CAPACITY = 5
NOTIFICATION_MAX_LENGTH = 150


class ComposeKind(IntEnum):
    NEW = 0
    REPLY = 1
    FORWARD = 2

    @classmethod
    def from_host(cls, value) -> "ComposeKind":
        if value == "reply":
            return cls.REPLY
        if value == "forward":
            return cls.FORWARD
        return cls.NEW

    def normalized(self) -> "ComposeKind":
        # there is no forward signature, forwards get the new one
        return ComposeKind.NEW if self is ComposeKind.FORWARD else self

    def storage_key(self) -> str:
        if self.normalized() is ComposeKind.REPLY:
            return REPLY_SIGNATURE_KEY
        return NEW_SIGNATURE_KEY


class AttachmentType(IntEnum):
    CID = 0
    URL = 1
