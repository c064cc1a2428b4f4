"""Runtime configuration for humm.

Defaults are resolved from environment variables, and a `.env` file in the
project root is loaded automatically when this module is imported.  Unlike a
module-level settings object, :class:`Config` is frozen: build it once with
:func:`load_config` and pass it to whatever needs it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from humm.errors import ConfigError

# Load .env from the project root (one level up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_TRUTHY = {"1", "true", "yes", "on"}


class SortField(str, Enum):
    URL = "url"
    TIME = "time"


def _env_bool(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Config:
    # ------------------------------------------------------------------
    # Basic auth
    # ------------------------------------------------------------------
    username: str = field(default_factory=lambda: os.environ.get("HUMM_USER", ""))
    password: str = field(default_factory=lambda: os.environ.get("HUMM_PASS", ""))

    # ------------------------------------------------------------------
    # Crawl
    # ------------------------------------------------------------------
    timeout: float = field(
        default_factory=lambda: float(os.environ.get("HUMM_TIMEOUT", "20"))
    )
    max_threads: int = field(
        default_factory=lambda: int(os.environ.get("HUMM_MAX_THREADS", "10"))
    )
    links_limit: int = field(
        default_factory=lambda: int(os.environ.get("HUMM_LINKS_LIMIT", "0"))
    )
    crawl: bool = False
    fail_fast: bool = field(default_factory=lambda: _env_bool("HUMM_FAIL_FAST"))

    # ------------------------------------------------------------------
    # Report
    # ------------------------------------------------------------------
    sort_field: SortField = field(
        default_factory=lambda: os.environ.get("HUMM_SORT", SortField.URL.value)
    )
    verbose: bool = False
    show_time: bool = False
    show_200: bool = False
    silent: bool = False

    def __post_init__(self) -> None:
        try:
            sort_field = SortField(self.sort_field)
        except ValueError:
            raise ConfigError(
                f"invalid sort field {self.sort_field!r}, expected url or time"
            ) from None
        # frozen: coerce through object.__setattr__
        object.__setattr__(self, "sort_field", sort_field)

        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.max_threads < 1:
            raise ConfigError(f"max threads must be at least 1, got {self.max_threads}")
        if self.links_limit < 0:
            raise ConfigError(f"links limit cannot be negative, got {self.links_limit}")
        if bool(self.username) != bool(self.password):
            raise ConfigError("basic auth needs both a username and a password")

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.password)


def load_config(**overrides: Any) -> Config:
    """Build a :class:`Config` from the environment plus explicit *overrides*.

    ``None`` overrides are ignored so CLI options left unset fall back to the
    environment defaults.

    Raises:
        ConfigError: On unknown keys, unparseable environment values or
            values out of range.
    """
    known = {f.name for f in fields(Config)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"unknown config keys: {sorted(unknown)}")
    given = {k: v for k, v in overrides.items() if v is not None}
    try:
        return Config(**given)
    except ConfigError:
        raise
    except ValueError as exc:
        raise ConfigError(f"invalid configuration value: {exc}") from exc
