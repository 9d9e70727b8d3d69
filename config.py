"""Centralized configuration loading for the resource newsletter service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_MAX_HTML_CHARS = 180_000


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


@dataclass(frozen=True)
class AppConfig:
    """Typed application configuration loaded from environment variables."""

    resource_store_dir: Path
    failure_log_dir: Path
    max_html_chars: int = DEFAULT_MAX_HTML_CHARS
    default_sync_enabled: bool = True
    email_template_path: Path | None = None


_REQUIRED_ENV_VARS = (
    "RESOURCE_STORE_DIR",
    "FAILURE_LOG_DIR",
)


def _get_required_env(name: str) -> str:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        raise ConfigError(f"Missing required environment variable: {name}")
    return raw.strip()


def _get_optional_env(name: str) -> str | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _parse_bool(name: str, raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"Invalid boolean value for {name}: {raw!r}")


def _parse_int(name: str, raw: str, minimum: int | None = None, maximum: int | None = None) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid integer value for {name}: {raw!r}") from exc

    if minimum is not None and value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise ConfigError(f"{name} must be <= {maximum}, got {value}")
    return value


@lru_cache(maxsize=1)
def get_config(load_dotenv_file: bool = True) -> AppConfig:
    """Load and cache app configuration."""
    if load_dotenv_file:
        load_dotenv()

    for name in _REQUIRED_ENV_VARS:
        _get_required_env(name)

    max_html_raw = _get_optional_env("NEWSLETTER_MAX_HTML_CHARS")
    sync_raw = _get_optional_env("NEWSLETTER_SYNC_ENABLED")
    template_raw = _get_optional_env("EMAIL_TEMPLATE_PATH")

    template_path = Path(template_raw) if template_raw else None
    if template_path is not None and not template_path.is_file():
        raise ConfigError(f"EMAIL_TEMPLATE_PATH does not point to a file: {template_raw!r}")

    return AppConfig(
        resource_store_dir=Path(_get_required_env("RESOURCE_STORE_DIR")),
        failure_log_dir=Path(_get_required_env("FAILURE_LOG_DIR")),
        max_html_chars=(
            _parse_int("NEWSLETTER_MAX_HTML_CHARS", max_html_raw, minimum=1)
            if max_html_raw
            else DEFAULT_MAX_HTML_CHARS
        ),
        default_sync_enabled=(
            _parse_bool("NEWSLETTER_SYNC_ENABLED", sync_raw) if sync_raw else True
        ),
        email_template_path=template_path,
    )


def reset_config_cache() -> None:
    """Clear memoized configuration for tests and process reloads."""
    get_config.cache_clear()
