"""
autosig_core.credentials
------------------------
Resolves the credential used to fetch a signature, cheapest method first:

1. an existing server session (``GET /Status`` reports ``isAuthenticated``)
2. a platform-issued access token exchanged server-side for a session
3. the action-credential token the task pane stored in roaming settings

Steps 1 and 2 only run where the client can issue access tokens. Both yield
the empty credential, meaning "the session cookie is enough". When all three
fail, ``CredentialError`` is raised.
"""

from __future__ import annotations
from autosig_core.capabilities import HostCapabilities
from autosig_core.constants import ACTION_CREDENTIAL_KEY
from autosig_core.errors import CredentialError
from autosig_core.host import MailHost, RoamingSettings
from autosig_core.logger import get_logger
from autosig_core.transport.transport_base import BaseTransport, TransportError

log = get_logger("autosig.credentials")

NO_CREDENTIAL = ""


class CredentialResolver:
    def __init__(
        self,
        transport: BaseTransport,
        host: MailHost,
        roaming: RoamingSettings,
        capabilities: HostCapabilities,
        status_path: str = "/Status",
        token_exchange_path: str = "/MicrosoftOAuth/SigninOnBehalfOf",
        credential_key: str = ACTION_CREDENTIAL_KEY,
    ):
        self.transport = transport
        self.host = host
        self.roaming = roaming
        self.capabilities = capabilities
        self.status_path = status_path
        self.token_exchange_path = token_exchange_path
        self.credential_key = credential_key

    async def resolve(self) -> str:
        if self.capabilities.delegated_auth:
            if await self._has_session():
                log.info("[AUTH] existing session, no credential needed")
                return NO_CREDENTIAL
            if await self._exchange_token():
                log.info("[AUTH] signed in on behalf of the mailbox user")
                return NO_CREDENTIAL
        else:
            log.debug("[AUTH] delegated tokens unsupported, skipping silent login")

        token = self.roaming.get(self.credential_key)
        if token:
            log.info("[AUTH] using stored action credential")
            return str(token)

        raise CredentialError("no session, access token or stored action credential")

    async def _has_session(self) -> bool:
        try:
            res = await self.transport.get(self.status_path)
        except TransportError as e:
            log.warning(f"[AUTH] status check failed: {e}")
            return False
        return res.ok and isinstance(res.body, dict) and bool(res.body.get("isAuthenticated"))

    async def _exchange_token(self) -> bool:
        try:
            token = await self.host.get_access_token()
        except Exception as e:
            # the platform reports every acquisition problem as an error
            log.warning(f"[AUTH] access token unavailable: {e}")
            return False
        if not token:
            return False

        try:
            res = await self.transport.get(self.token_exchange_path, headers=self.transport.bearer(token))
        except TransportError as e:
            log.warning(f"[AUTH] token exchange failed: {e}")
            return False
        if not res.ok:
            log.warning(f"[AUTH] token exchange rejected with {res.status}")
            return False
        return bool(res.body)
