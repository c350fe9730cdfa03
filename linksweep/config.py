"""Centralised settings for the link checker.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from linksweep import __version__

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_timeout() -> float | None:
    value = os.environ.get("LINKSWEEP_REQUEST_TIMEOUT", "").strip()
    return float(value) if value else None


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP probing
    # ------------------------------------------------------------------
    request_timeout: float | None = field(default_factory=_env_timeout)
    max_concurrent_probes: int = field(
        default_factory=lambda: int(os.environ.get("LINKSWEEP_MAX_CONCURRENT_PROBES", "8"))
    )
    follow_redirects: bool = field(
        default_factory=lambda: _env_bool("LINKSWEEP_FOLLOW_REDIRECTS", True)
    )
    verify_tls: bool = field(
        default_factory=lambda: _env_bool("LINKSWEEP_VERIFY_TLS", True)
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "LINKSWEEP_USER_AGENT", f"linksweep/{__version__}"
        )
    )

    # ------------------------------------------------------------------
    # CLI defaults
    # ------------------------------------------------------------------
    default_blacklisted_directories: list[str] = field(
        default_factory=lambda: _env_list("LINKSWEEP_BLACKLISTED_DIRS", ".git")
    )

    @property
    def probe_workers(self) -> int:
        """Size of the probe pool, never below one worker."""
        return max(1, self.max_concurrent_probes)


# Module-level singleton, import this everywhere:
#   from linksweep.config import settings
settings = Settings()
