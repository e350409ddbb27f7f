import asyncio
import pytest
from autosig_core.capabilities import HostCapabilities
from autosig_core.host import HostResult, MailHost, RoamingSettings
from autosig_core.localization import Translator
from autosig_core.notifications import NotificationManager
from autosig_core.storage import InMemoryStorage, KeyValueStore


def run(coro):
    return asyncio.run(coro)


class FakeClock:
    def __init__(self, now=1_700_000_000_000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class FakeEvent:
    def __init__(self):
        self.completed_calls = 0

    def completed(self):
        self.completed_calls += 1


class FakeMailHost(MailHost):
    """Records every host call; methods listed in ``fail`` report a failure."""

    def __init__(self, caps=None, compose="newMail", language="en-US", mailbox="jane@example.com", access_token=None):
        self.caps = caps if caps is not None else {
            "set_signature": True,
            "compose_type": True,
            "base64_attachments": True,
            "durable_storage": False,
            "delegated_auth": False,
        }
        self.compose = compose
        self.language = language
        self.mailbox = mailbox
        self.access_token = access_token
        self.client_signature_enabled = True

        self.roaming = {}
        self.attachments = []
        self.notifications = {}
        self.signature = None
        self.selected = None
        self.calls = []
        self.fail = set()
        self.saves = 0

    def _result(self, name, value=None):
        if name in self.fail:
            return HostResult.failure(f"{name} failed")
        return HostResult.success(value)

    def capabilities(self):
        return dict(self.caps)

    def mailbox_address(self):
        return self.mailbox

    def display_language(self):
        return self.language

    async def get_compose_kind(self):
        self.calls.append(("get_compose_kind",))
        return self._result("get_compose_kind", self.compose)

    async def is_client_signature_enabled(self):
        self.calls.append(("is_client_signature_enabled",))
        return self._result("is_client_signature_enabled", self.client_signature_enabled)

    async def disable_client_signature(self):
        self.calls.append(("disable_client_signature",))
        result = self._result("disable_client_signature")
        if result.ok:
            self.client_signature_enabled = False
        return result

    async def set_signature(self, content):
        self.calls.append(("set_signature", content))
        result = self._result("set_signature")
        if result.ok:
            self.signature = content
        return result

    async def set_selected_content(self, content):
        self.calls.append(("set_selected_content", content))
        result = self._result("set_selected_content")
        if result.ok:
            self.selected = content
        return result

    async def add_attachment(self, kind, data, name, is_inline=True):
        self.calls.append(("add_attachment", kind, data, name, is_inline))
        result = self._result("add_attachment")
        if result.ok:
            self.attachments.append({"name": name, "kind": kind, "data": data, "isInline": is_inline})
        return result

    def list_attachments(self):
        return [{"name": a["name"]} for a in self.attachments]

    async def show_notification(self, key, details):
        self.calls.append(("show_notification", key, details))
        result = self._result("show_notification")
        if result.ok:
            self.notifications[key] = details
        return result

    async def clear_notification(self, key):
        self.calls.append(("clear_notification", key))
        self.notifications.pop(key, None)
        return self._result("clear_notification")

    def get_roaming_setting(self, key):
        return self.roaming.get(key)

    def set_roaming_setting(self, key, value):
        self.roaming[key] = value

    def remove_roaming_setting(self, key):
        self.roaming.pop(key, None)

    async def save_roaming_settings(self):
        self.saves += 1
        return self._result("save_roaming_settings")

    async def get_access_token(self):
        if isinstance(self.access_token, Exception):
            raise self.access_token
        if self.access_token is None:
            raise RuntimeError("no access token")
        return self.access_token

    def calls_named(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def provider():
    return InMemoryStorage()


@pytest.fixture
def kvs(provider, clock):
    return KeyValueStore(provider, clock=clock)


@pytest.fixture
def host():
    return FakeMailHost()


@pytest.fixture
def caps(host):
    return HostCapabilities.probe(host)


@pytest.fixture
def roaming(host):
    return RoamingSettings(host)


@pytest.fixture
def translator():
    return Translator("en-US")


@pytest.fixture
def notifications(host, translator):
    return NotificationManager(host, translator.translate)
