"""Settings for marathon-spine.

``MarathonSpineSettings`` reads ``MARATHON_SPINE_*`` environment variables
(and a ``.env`` file) so the CLI can be tuned without flags.

Examples:
    >>> from marathon_spine.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.json_indent
    2

Tags:
    settings, configuration, pydantic, environment, marathon-spine
"""

from __future__ import annotations

import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from marathon_spine.core.errors import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class MarathonSpineSettings(BaseSettings):
    """Process-level settings.

    Fields
    ──────
    log_level       : Structlog log level
    log_json        : JSON log output; None picks JSON when stdout is not a TTY
    json_indent     : Indent for rendered container JSON (0 for compact)
    default_network : Network mode the CLI applies when ``--network`` is absent
    """

    model_config = SettingsConfigDict(
        env_prefix="MARATHON_SPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    log_json: bool | None = None

    # ── Rendering ────────────────────────────────────────────────
    json_indent: int = Field(default=2, ge=0)
    default_network: str | None = Field(
        default=None,
        description="Network mode applied when none is given, e.g. BRIDGE or HOST",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, MarathonSpineSettings] = {}


def get_settings(*, _force_reload: bool = False) -> MarathonSpineSettings:
    """Load, validate, and cache a :class:`MarathonSpineSettings` instance.

    Raises:
        ConfigError: An environment value failed validation.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    try:
        settings = MarathonSpineSettings()
    except ValidationError as exc:
        first = exc.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigError(key, first.get("input"), f"Invalid configuration for {key}: {first['msg']}") from exc

    _settings_cache["default"] = settings
    return settings


def reset_settings() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = ["MarathonSpineSettings", "get_settings", "reset_settings"]
