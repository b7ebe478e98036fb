"""
Client Settings
Centralized configuration for the backend connection and local session storage
"""
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import streamlit as st
from dotenv import load_dotenv

from livestock_core.errors import ConfigurationError
from livestock_core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"

# Environment variable -> settings field
ENV_VARS = {
    "LIVESTOCK_API_URL": "base_url",
    "LIVESTOCK_API_TIMEOUT": "timeout",
    "LIVESTOCK_STORAGE_DIR": "storage_dir",
    "LIVESTOCK_RECENT_EVENTS": "recent_events_limit",
    "LIVESTOCK_MAX_WORKERS": "max_workers",
}


@dataclass(frozen=True)
class ClientSettings:
    """Configuration for the REST backend and the local session files"""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    storage_dir: str = ".session"
    recent_events_limit: int = 5
    max_workers: int = 4

    def with_overrides(self, **overrides: Any) -> "ClientSettings":
        """Return a copy with the given (non-None) fields replaced"""
        values = {k: v for k, v in overrides.items() if v is not None}
        return _coerce(replace(self, **values))


def _coerce(settings: ClientSettings) -> ClientSettings:
    """Validate and normalize field types"""
    try:
        timeout = float(settings.timeout)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Invalid timeout: {settings.timeout!r}",
            config_key="timeout",
            expected_type="float",
        )

    ints = {}
    for key in ("recent_events_limit", "max_workers"):
        raw = getattr(settings, key)
        try:
            ints[key] = int(raw)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Invalid {key}: {raw!r}",
                config_key=key,
                expected_type="int",
            )

    if timeout <= 0:
        raise ConfigurationError("Timeout must be positive", config_key="timeout")
    if ints["max_workers"] < 1:
        raise ConfigurationError("max_workers must be at least 1", config_key="max_workers")
    if not settings.base_url:
        raise ConfigurationError("base_url must not be empty", config_key="base_url")

    return replace(
        settings,
        base_url=str(settings.base_url).rstrip("/"),
        timeout=timeout,
        storage_dir=str(settings.storage_dir),
        **ints,
    )


def _load_from_secrets() -> Optional[Dict[str, Any]]:
    """
    Load the [api] table from Streamlit secrets

    Expected secrets.toml format:
    [api]
    base_url = "https://farm.example.com/api"
    timeout = 30
    storage_dir = ".session"
    """
    try:
        if hasattr(st, "secrets") and "api" in st.secrets:
            return dict(st.secrets["api"])
    except Exception as e:
        # No secrets.toml at all is the normal case outside Streamlit
        logger.debug(f"Streamlit secrets unavailable: {e}")
    return None


def _load_from_env() -> Dict[str, Any]:
    """Collect settings from environment variables (and a .env file)"""
    load_dotenv()
    values = {}
    for env_name, field_name in ENV_VARS.items():
        value = os.getenv(env_name)
        if value not in (None, ""):
            values[field_name] = value
    return values


def load_settings(**overrides: Any) -> ClientSettings:
    """
    Resolve client settings.

    Precedence: explicit overrides, then Streamlit secrets, then environment
    variables, then defaults.
    """
    known = set(ClientSettings.__dataclass_fields__)

    secrets = _load_from_secrets()
    if secrets is not None:
        values = {k: v for k, v in secrets.items() if k in known}
        source = "streamlit secrets"
    else:
        values = _load_from_env()
        source = "environment" if values else "defaults"

    unknown = set(overrides) - known
    if unknown:
        raise ConfigurationError(f"Unknown settings: {sorted(unknown)}")
    values.update({k: v for k, v in overrides.items() if v is not None})
    settings = _coerce(ClientSettings(**values))
    logger.info(f"Loaded client settings from {source}: base_url={settings.base_url}")
    return settings
