"""
autosig_core.orchestrator
-------------------------
Decides which signature a compose event gets.

Per event the resolver runs a fixed sequence of stages::

    CHECK_INVALIDATION → READ_CACHE → RESOLVE_CREDENTIAL → FETCH → PERSIST

The cache is a fast path, not the source of truth: a remote refresh is
attempted even when a usable cached signature exists, and the cached copy is
only used when that refresh fails. A failed request to the signature server
is reported with an error notification. A reply that comes back without a
signature is retried once as a new message. Every path ends in either a
``Present`` signature or ``Absent``; on ``Absent`` the user is told that no
default signature is set.
"""

from __future__ import annotations
import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple
from autosig_core.constants import ComposeKind
from autosig_core.credentials import CredentialResolver
from autosig_core.errors import CredentialError, FetchError
from autosig_core.invalidation import CacheInvalidationController
from autosig_core.logger import get_logger
from autosig_core.notifications import NotificationManager
from autosig_core.remote import SignatureSource
from autosig_core.signature import Absent, Signature, parse_signature
from autosig_core.storage.kvs import KeyValueStore
from autosig_core.transport.transport_base import TransportError
from autosig_core.utils import days_to_ms

log = get_logger("autosig.orchestrator")


class Stage(str, Enum):
    CHECK_INVALIDATION = "check_invalidation"
    READ_CACHE = "read_cache"
    RESOLVE_CREDENTIAL = "resolve_credential"
    FETCH = "fetch"
    PERSIST = "persist"


class Source(str, Enum):
    REMOTE = "remote"
    CACHE = "cache"
    NONE = "none"


@dataclass
class Resolution:
    requested: ComposeKind
    kind: ComposeKind
    signature: Signature
    source: Source
    purged: bool = False
    stages: List[Stage] = field(default_factory=list)


class SignatureResolver:
    def __init__(
        self,
        kvs: KeyValueStore,
        invalidation: CacheInvalidationController,
        credentials: CredentialResolver,
        source: SignatureSource,
        notifications: NotificationManager,
        translate: Callable[..., str],
        ttl_ms: int = days_to_ms(1),
        always_refresh: bool = True,
        allow_anonymous_fetch: bool = False,
        timeout: Optional[float] = 30.0,
    ):
        self.kvs = kvs
        self.invalidation = invalidation
        self.credentials = credentials
        self.source = source
        self.notifications = notifications
        self.translate = translate
        self.ttl_ms = ttl_ms
        self.always_refresh = always_refresh
        self.allow_anonymous_fetch = allow_anonymous_fetch
        self.timeout = timeout

    async def resolve(self, kind: ComposeKind) -> Signature:
        return (await self.run(kind)).signature

    async def run(self, kind: ComposeKind) -> Resolution:
        requested = ComposeKind(kind)
        kind = requested.normalized()
        stages: List[Stage] = [Stage.CHECK_INVALIDATION]
        purged = await self.invalidation.check_and_clear()
        retried = False

        def done(signature: Signature, source: Source) -> Resolution:
            log.info(f"[RESOLVE] {requested.name.lower()} → {kind.name.lower()} from {source.value} (present={signature.is_present})")
            return Resolution(requested, kind, signature, source, purged, stages)

        while True:
            key = kind.storage_key()
            stages.append(Stage.READ_CACHE)
            cached, stale = await self._read_cache(key)
            use_cached = cached.is_present and not purged

            if use_cached and not stale and not self.always_refresh:
                return done(cached, Source.CACHE)

            try:
                fetched = await self._with_timeout(self._fetch(kind, stages))
            except (TransportError, FetchError, CredentialError, asyncio.TimeoutError) as e:
                log.warning(f"[RESOLVE] fetching the {kind.name.lower()} signature failed: {e!r}")
                if isinstance(e, (TransportError, FetchError)):
                    await self.notifications.show_error(self.translate("signature.httpError"))
                if use_cached:
                    return done(cached, Source.CACHE)
                await self._notify_no_signature()
                return done(Absent("fetch failed, nothing cached"), Source.NONE)

            if fetched.is_present:
                stages.append(Stage.PERSIST)
                await self._persist(key, fetched)
                return done(fetched, Source.REMOTE)

            if kind is ComposeKind.REPLY and not retried:
                # no reply signature configured, use the new-mail one instead
                retried = True
                kind = ComposeKind.NEW
                continue

            await self._notify_no_signature()
            return done(Absent("server has no signature"), Source.NONE)

    async def _read_cache(self, key: str) -> Tuple[Signature, bool]:
        lookup = await self.kvs.lookup(key)
        if not lookup.found:
            return Absent("not cached"), False

        signature = parse_signature(lookup.value)
        if not signature.is_present:
            log.warning(f"[RESOLVE] cached value under {key} is not a signature, removing it")
            await self.kvs.remove(key)
        return signature, lookup.expired

    async def _fetch(self, kind: ComposeKind, stages: List[Stage]) -> Signature:
        stages.append(Stage.RESOLVE_CREDENTIAL)
        try:
            credential = await self.credentials.resolve()
        except CredentialError:
            if not self.allow_anonymous_fetch:
                raise
            log.info("[RESOLVE] no credential, fetching anonymously")
            credential = ""

        stages.append(Stage.FETCH)
        return await self.source.fetch(kind, credential)

    async def _with_timeout(self, coro):
        if not self.timeout:
            return await coro
        return await asyncio.wait_for(coro, self.timeout)

    async def _persist(self, key: str, signature: Signature) -> None:
        try:
            await self.kvs.set(key, signature.to_dict(), expires_ms=self.ttl_ms, soft_expire=True)
        except Exception:
            # the fetched signature is still inserted, it just is not cached
            log.exception(f"[RESOLVE] could not cache signature under {key}")

    async def _notify_no_signature(self) -> None:
        await self.notifications.show_success(self.translate("signature.noDefault"), show_task_pane=True)
