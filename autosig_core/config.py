# autosig_core/config.py
"""
Runtime settings, read once from AUTOSIG_* environment variables.
"""

from __future__ import annotations
from dataclasses import dataclass
import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    base_url: str = "http://localhost:8080"
    transport: str = "http"                   # http | local
    storage_provider: str = "auto"            # auto | sqlite | memory
    db_path: str = "db/autosig_state.db"

    signature_path: str = "/addin/outlook/default"
    status_path: str = "/Status"
    token_exchange_path: str = "/MicrosoftOAuth/SigninOnBehalfOf"

    http_timeout: float = 5.0
    resolution_timeout: float = 30.0
    signature_ttl_days: float = 1.0
    always_refresh: bool = True
    allow_anonymous_fetch: bool = False

    default_culture: str = "en"
    notification_icon: str = "autosig.tpicon_32x32"
    taskpane_command_id: str = "autosig.TaskpaneButton"

    def storage_config(self) -> dict:
        return {"provider": self.storage_provider, "sqlite_path": self.db_path}

    @classmethod
    def from_env(cls) -> "Settings":
        d = cls()
        return cls(
            base_url=os.getenv("AUTOSIG_BASE_URL", d.base_url),
            transport=os.getenv("AUTOSIG_TRANSPORT", d.transport).lower(),
            storage_provider=os.getenv("AUTOSIG_STORAGE_PROVIDER", d.storage_provider).lower(),
            db_path=os.getenv("AUTOSIG_DB_PATH", d.db_path),
            signature_path=os.getenv("AUTOSIG_SIGNATURE_PATH", d.signature_path),
            status_path=os.getenv("AUTOSIG_STATUS_PATH", d.status_path),
            token_exchange_path=os.getenv("AUTOSIG_TOKEN_EXCHANGE_PATH", d.token_exchange_path),
            http_timeout=float(os.getenv("AUTOSIG_HTTP_TIMEOUT", d.http_timeout)),
            resolution_timeout=float(os.getenv("AUTOSIG_RESOLUTION_TIMEOUT", d.resolution_timeout)),
            signature_ttl_days=float(os.getenv("AUTOSIG_SIGNATURE_TTL_DAYS", d.signature_ttl_days)),
            always_refresh=_env_bool("AUTOSIG_ALWAYS_REFRESH", d.always_refresh),
            allow_anonymous_fetch=_env_bool("AUTOSIG_ALLOW_ANONYMOUS_FETCH", d.allow_anonymous_fetch),
            default_culture=os.getenv("AUTOSIG_DEFAULT_CULTURE", d.default_culture),
            notification_icon=os.getenv("AUTOSIG_NOTIFICATION_ICON", d.notification_icon),
            taskpane_command_id=os.getenv("AUTOSIG_TASKPANE_COMMAND_ID", d.taskpane_command_id),
        )
