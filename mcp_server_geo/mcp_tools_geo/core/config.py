"""Environment configuration.

Each server needs exactly one API key. It is read once at startup; a missing
key raises ``ConfigError`` before any protocol traffic happens. A ``.env``
file in the working directory is honoured via python-dotenv.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError

HTTP_TIMEOUT_ENV = "GEO_MCP_HTTP_TIMEOUT"


@dataclass(frozen=True)
class ServerConfig:
    """Immutable per-server configuration, built once and injected."""
    name: str
    base_url: str
    api_key: str = field(repr=False)
    timeout_s: Optional[float] = None


def load_env() -> None:
    """Load ``.env`` if present. Existing environment variables win."""
    load_dotenv(override=False)


def get_required(key: str) -> str:
    """Get a required env var. Raises ConfigError if missing or blank."""
    load_env()
    val = os.getenv(key, "").strip()
    if not val:
        raise ConfigError(f"{key} environment variable is required")
    return val


def get_optional_float(key: str, default: Optional[float] = None) -> Optional[float]:
    """Get an optional env var as float; invalid values are a config error."""
    load_env()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from e


def load_server_config(name: str, base_url: str, api_key_env: str) -> ServerConfig:
    return ServerConfig(
        name=name,
        base_url=base_url,
        api_key=get_required(api_key_env),
        timeout_s=get_optional_float(HTTP_TIMEOUT_ENV),
    )
