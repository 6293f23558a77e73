"""Centralized configuration management for the employer search core."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, PrivateAttr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables defined in a local .env file before instantiating the
# settings singleton so every consumer importing :mod:`employer_search.settings`
# observes the same values.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_CACHE_TTL_SECONDS = 7 * 24 * 60 * 60
DEFAULT_STORAGE_DIR = Path("./data/secure")
DEFAULT_SOURCE_LATENCY_SECONDS = 0.5
DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.3
DEFAULT_LOG_LEVEL = "INFO"


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Values are read from the process environment (and ``.env``) using the
    aliases below.  Helper properties expose derived values so callers never
    repeat parsing logic.
    """

    _explicit_storage_key: bool = PrivateAttr(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def __init__(self, **values: object) -> None:
        """Capture explicit overrides prior to delegating to ``BaseSettings``."""

        normalized_keys = {str(key).lower() for key in values}
        super().__init__(**values)
        self._explicit_storage_key = (
            "storage_encryption_key" in normalized_keys
            or "employer_storage_key" in normalized_keys
        )
        key_env = os.getenv("EMPLOYER_STORAGE_KEY")
        if key_env is not None and key_env.strip():
            self._explicit_storage_key = True

    cache_ttl_seconds: int = Field(
        default=DEFAULT_CACHE_TTL_SECONDS,
        alias="EMPLOYER_CACHE_TTL_SECONDS",
        gt=0,
        description="Lifetime of the cached employer collection in seconds.",
    )
    storage_dir: Path = Field(
        default=DEFAULT_STORAGE_DIR,
        alias="EMPLOYER_STORAGE_DIR",
        description="Directory holding the encrypted key-value entries.",
    )
    storage_encryption_key: str | None = Field(
        default=None,
        alias="EMPLOYER_STORAGE_KEY",
        description=(
            "URL-safe base64 Fernet key used to encrypt stored entries. When"
            " unset a key file is generated inside the storage directory."
        ),
    )
    source_latency_seconds: float = Field(
        default=DEFAULT_SOURCE_LATENCY_SECONDS,
        alias="EMPLOYER_SOURCE_LATENCY_SECONDS",
        ge=0,
        description="Simulated latency applied by the static employer source.",
    )
    search_debounce_seconds: float = Field(
        default=DEFAULT_SEARCH_DEBOUNCE_SECONDS,
        alias="SEARCH_DEBOUNCE_SECONDS",
        ge=0,
        description="Settling interval applied to query input before searching.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )

    @property
    def storage_key_path(self) -> Path:
        """Location of the generated key file used when no key is configured."""

        return self.storage_dir / ".storage.key"

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for unset optional configuration."""

        warnings: list[str] = []

        if not self._explicit_storage_key and not self.storage_encryption_key:
            warnings.append(
                "EMPLOYER_STORAGE_KEY is not set - a key file will be generated at "
                f"{self.storage_key_path} (keep it out of version control)"
            )

        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_CACHE_TTL_SECONDS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_SEARCH_DEBOUNCE_SECONDS",
    "DEFAULT_SOURCE_LATENCY_SECONDS",
    "DEFAULT_STORAGE_DIR",
    "get_settings",
]
