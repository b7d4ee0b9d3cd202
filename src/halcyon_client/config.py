from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_ENTRY_PATH = "/"
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class HalcyonSettings:
    base_url: str
    entry_path: str = DEFAULT_ENTRY_PATH
    access_token: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"


def _get_float_env(name: str, default: float) -> float:
    """Parse a float environment variable with a safe default."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def load_env_config(*, use_dotenv: bool = True) -> HalcyonSettings:
    """Load API settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    return HalcyonSettings(
        base_url=os.getenv("HALCYON_BASE_URL", "").strip(),
        entry_path=os.getenv("HALCYON_ENTRY_PATH", "").strip() or DEFAULT_ENTRY_PATH,
        access_token=os.getenv("HALCYON_ACCESS_TOKEN", "").strip() or None,
        timeout_seconds=_get_float_env(
            "HALCYON_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS
        ),
        log_level=os.getenv("HALCYON_LOG_LEVEL", "").strip() or "INFO",
    )


def create_fetcher_from_env(**kwargs):
    """Create an HttpxFetcher from environment variables."""
    from .fetcher import HttpxFetcher

    return HttpxFetcher.from_env(**kwargs)


__all__ = [
    "HalcyonSettings",
    "load_env_config",
    "create_fetcher_from_env",
    "DEFAULT_ENTRY_PATH",
]
