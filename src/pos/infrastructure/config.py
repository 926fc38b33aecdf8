"""Runtime configuration, read from ``POS_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}
_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigurationError(Exception):
    """An environment variable holds a value that cannot be used."""


@dataclass(frozen=True)
class Settings:
    database_url: str = f"sqlite:///{_DATA_DIR / 'pos.db'}"
    log_level: str = "INFO"
    log_json: bool = False
    strict_status_transitions: bool = False
    host: str = "127.0.0.1"
    port: int = 2022

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        defaults = cls()

        level = env.get("POS_LOG_LEVEL", defaults.log_level).upper()
        if level not in _LEVELS:
            raise ConfigurationError(f"POS_LOG_LEVEL: unknown level {level!r}")

        return cls(
            database_url=env.get("POS_DATABASE_URL", defaults.database_url),
            log_level=level,
            log_json=_flag(env, "POS_LOG_JSON", defaults.log_json),
            strict_status_transitions=_flag(
                env, "POS_STRICT_STATUS_TRANSITIONS", defaults.strict_status_transitions
            ),
            host=env.get("POS_HOST", defaults.host),
            port=_port(env, defaults.port),
        )


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name}: expected a boolean, got {raw!r}")


def _port(env: Mapping[str, str], default: int) -> int:
    raw = env.get("POS_PORT")
    if raw is None:
        return default
    try:
        port = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"POS_PORT: expected an integer, got {raw!r}") from exc
    if not 0 < port < 65536:
        raise ConfigurationError(f"POS_PORT: {port} is out of range")
    return port
