"""
autosig_core.handler
--------------------
Entry point for the "new message compose" event and the factory that wires
the pipeline together. Every collaborator is passed in explicitly.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from autosig_core.capabilities import HostCapabilities
from autosig_core.config import Settings
from autosig_core.constants import ComposeKind
from autosig_core.credentials import CredentialResolver
from autosig_core.host import MailHost, RoamingSettings
from autosig_core.insertion import InsertionDispatcher
from autosig_core.invalidation import CacheInvalidationController
from autosig_core.localization import Translator
from autosig_core.logger import get_logger
from autosig_core.notifications import NotificationManager
from autosig_core.orchestrator import SignatureResolver
from autosig_core.remote import SignatureSource
from autosig_core.storage import KeyValueStore, StorageProvider, load_storage_provider
from autosig_core.transport import BaseTransport, transport_factory
from autosig_core.utils import days_to_ms

log = get_logger("autosig.handler")


class ComposeHandler:
    def __init__(
        self,
        host: MailHost,
        capabilities: HostCapabilities,
        resolver: SignatureResolver,
        dispatcher: InsertionDispatcher,
        notifications: NotificationManager,
        translator: Translator,
    ):
        self.host = host
        self.capabilities = capabilities
        self.resolver = resolver
        self.dispatcher = dispatcher
        self.notifications = notifications
        self.translator = translator

    async def on_message_compose(self, event=None) -> bool:
        """Insert the default signature; ``event.completed()`` is always called."""
        try:
            await self.disable_client_signature()
            kind = await self.compose_kind()
            signature = await self.resolver.resolve(kind)
            if not signature.is_present:
                return False

            inserted = await self.dispatcher.insert(signature)
            if inserted:
                await self.notifications.show_success(self.translator.translate("signature.insertSuccess"))
            return inserted
        finally:
            if event is not None:
                event.completed()

    async def disable_client_signature(self) -> None:
        # the client's own signature would be inserted next to ours
        if not self.capabilities.set_signature:
            return
        enabled = await self.host.is_client_signature_enabled()
        if not enabled.ok:
            log.error(f"[COMPOSE] client signature state unknown: {enabled.error}")
            return
        if enabled.value:
            result = await self.host.disable_client_signature()
            if not result.ok:
                log.error(f"[COMPOSE] could not disable client signature: {result.error}")

    async def compose_kind(self) -> ComposeKind:
        if not self.capabilities.compose_type:
            return ComposeKind.NEW
        result = await self.host.get_compose_kind()
        if not result.ok:
            log.error(f"[COMPOSE] compose type unavailable, assuming new: {result.error}")
            return ComposeKind.NEW
        return ComposeKind.from_host(result.value)


@dataclass
class Pipeline:
    settings: Settings
    capabilities: HostCapabilities
    storage: StorageProvider
    kvs: KeyValueStore
    transport: BaseTransport
    translator: Translator
    notifications: NotificationManager
    resolver: SignatureResolver
    dispatcher: InsertionDispatcher
    handler: ComposeHandler

    def close(self) -> None:
        self.transport.close()
        self.storage.close()


def build_pipeline(
    host: MailHost,
    settings: Optional[Settings] = None,
    transport: Optional[BaseTransport] = None,
    storage: Optional[StorageProvider] = None,
) -> Pipeline:
    settings = settings or Settings.from_env()
    capabilities = HostCapabilities.probe(host)
    log.info(f"[BOOT] capabilities {capabilities.to_dict()}")

    storage = storage or load_storage_provider(settings.storage_config(), capabilities)
    kvs = KeyValueStore(storage)
    transport = transport or transport_factory(settings)
    roaming = RoamingSettings(host)
    translator = Translator(host.display_language(), default_culture=settings.default_culture)

    notifications = NotificationManager(
        host,
        translator.translate,
        icon=settings.notification_icon,
        taskpane_command_id=settings.taskpane_command_id,
    )
    credentials = CredentialResolver(
        transport,
        host,
        roaming,
        capabilities,
        status_path=settings.status_path,
        token_exchange_path=settings.token_exchange_path,
    )
    resolver = SignatureResolver(
        kvs,
        CacheInvalidationController(kvs, roaming),
        credentials,
        SignatureSource(transport, host, capabilities, path=settings.signature_path),
        notifications,
        translator.translate,
        ttl_ms=days_to_ms(settings.signature_ttl_days),
        always_refresh=settings.always_refresh,
        allow_anonymous_fetch=settings.allow_anonymous_fetch,
        timeout=settings.resolution_timeout,
    )
    dispatcher = InsertionDispatcher(host, capabilities, notifications, translator.translate, base_url=settings.base_url)
    handler = ComposeHandler(host, capabilities, resolver, dispatcher, notifications, translator)

    return Pipeline(
        settings=settings,
        capabilities=capabilities,
        storage=storage,
        kvs=kvs,
        transport=transport,
        translator=translator,
        notifications=notifications,
        resolver=resolver,
        dispatcher=dispatcher,
        handler=handler,
    )
