import json
import logging
from autosig_core.config import Settings
from autosig_core.logger import JsonFormatter, get_logger


def test_defaults_match_server_endpoints(monkeypatch):
    for name in ("AUTOSIG_BASE_URL", "AUTOSIG_TRANSPORT", "AUTOSIG_ALWAYS_REFRESH", "AUTOSIG_SIGNATURE_TTL_DAYS"):
        monkeypatch.delenv(name, raising=False)
    s = Settings.from_env()

    assert s.signature_path == "/addin/outlook/default"
    assert s.status_path == "/Status"
    assert s.token_exchange_path == "/MicrosoftOAuth/SigninOnBehalfOf"
    assert s.always_refresh is True
    assert s.allow_anonymous_fetch is False
    assert s.signature_ttl_days == 1.0


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AUTOSIG_BASE_URL", "https://sig.example.com")
    monkeypatch.setenv("AUTOSIG_TRANSPORT", "LOCAL")
    monkeypatch.setenv("AUTOSIG_STORAGE_PROVIDER", "sqlite")
    monkeypatch.setenv("AUTOSIG_DB_PATH", "/tmp/sig.db")
    monkeypatch.setenv("AUTOSIG_ALWAYS_REFRESH", "off")
    monkeypatch.setenv("AUTOSIG_ALLOW_ANONYMOUS_FETCH", "yes")
    monkeypatch.setenv("AUTOSIG_RESOLUTION_TIMEOUT", "12.5")

    s = Settings.from_env()

    assert s.base_url == "https://sig.example.com"
    assert s.transport == "local"
    assert s.storage_config() == {"provider": "sqlite", "sqlite_path": "/tmp/sig.db"}
    assert s.always_refresh is False
    assert s.allow_anonymous_fetch is True
    assert s.resolution_timeout == 12.5


def test_json_formatter_escapes_messages():
    record = logging.LogRecord("autosig.test", logging.ERROR, __file__, 1, 'bad "quote"\nline', None, None)
    entry = json.loads(JsonFormatter().format(record))

    assert entry["level"] == "ERROR"
    assert entry["name"] == "autosig.test"
    assert entry["msg"] == 'bad "quote"\nline'
    assert entry["ts"].endswith("Z")


def test_component_loggers_share_root_handler():
    log = get_logger("autosig.test.component", level="DEBUG")

    assert log.level == logging.DEBUG
    assert log.handlers == []
    assert logging.getLogger("autosig").handlers
