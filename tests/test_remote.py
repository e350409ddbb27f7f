import pytest
from autosig_core.capabilities import HostCapabilities
from autosig_core.constants import AttachmentType, ComposeKind
from autosig_core.errors import FetchError
from autosig_core.remote import SignatureSource, split_credential
from autosig_core.signature import Present
from autosig_core.transport import LocalAdapter, Response
from conftest import FakeMailHost, run


def test_split_credential():
    assert split_credential("jane:abc123") == ("jane", "abc123")
    assert split_credential("abc123") == ("", "abc123")
    assert split_credential("") == ("", "")
    assert split_credential("jane:") == ("", "jane")


def test_fetch_sends_expected_query():
    transport = LocalAdapter()
    transport.route("GET", "/addin/outlook/default", lambda **kw: {"content": "<p>Jane</p>"})
    source = SignatureSource(transport, FakeMailHost(), HostCapabilities(base64_attachments=True))

    sig = run(source.fetch(ComposeKind.FORWARD, "jane:abc123"))

    assert sig == Present("<p>Jane</p>")
    assert transport.requests[0]["params"] == {
        "attachmentType": int(AttachmentType.CID),
        "composeKind": int(ComposeKind.NEW),
        "credentialToken": "abc123",
        "mailboxAddress": "jane@example.com",
        "username": "jane",
    }


def test_url_attachments_without_base64_support():
    source = SignatureSource(LocalAdapter(), FakeMailHost(), HostCapabilities())
    assert source.attachment_type() is AttachmentType.URL
    assert source.build_params(ComposeKind.REPLY, "")["composeKind"] == 1


def test_non_2xx_raises_fetch_error():
    transport = LocalAdapter()
    transport.route("GET", "/addin/outlook/default", lambda **kw: Response(status=403, body="forbidden"))
    source = SignatureSource(transport, FakeMailHost(), HostCapabilities())

    with pytest.raises(FetchError) as exc:
        run(source.fetch(ComposeKind.NEW, "t"))
    assert exc.value.status == 403


def test_empty_body_is_absent():
    transport = LocalAdapter()
    transport.route("GET", "/addin/outlook/default", lambda **kw: None)
    source = SignatureSource(transport, FakeMailHost(), HostCapabilities())

    assert not run(source.fetch(ComposeKind.NEW, "t")).is_present
