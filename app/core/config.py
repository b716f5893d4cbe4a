from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_HUB_URL = "https://central.spacestation14.io/hub/api/servers"


def _getenv(name: str, default: str) -> str:
    # Centralize env access so it’s easy to extend later (type casting, required vars)
    return os.environ.get(name, default).strip()


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    host: str
    port: int
    hub_url: str
    status_timeout: float

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()
    port_raw = _getenv("PORT", "3030")
    timeout_raw = _getenv("STATUS_TIMEOUT", "5")

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    try:
        port = int(port_raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer (got {port_raw!r})") from None

    try:
        status_timeout = float(timeout_raw)
    except ValueError:
        raise ValueError(
            f"STATUS_TIMEOUT must be a number of seconds (got {timeout_raw!r})"
        ) from None
    if status_timeout <= 0:
        raise ValueError(f"STATUS_TIMEOUT must be > 0 (got {status_timeout!r})")

    hub_url = _getenv("HUB_URL", DEFAULT_HUB_URL) or DEFAULT_HUB_URL

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=log_json_raw in ("1", "true", "yes", "on"),
        host=_getenv("HOST", "127.0.0.1") or "127.0.0.1",
        port=port,
        hub_url=hub_url,
        status_timeout=status_timeout,
    )


SETTINGS = load_settings()
