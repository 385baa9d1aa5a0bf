"""Configuration loaded from environment variables.

The CLI calls ``load_dotenv()`` before reading these, so a ``.env`` file in
the working directory is honoured there. The library itself only consults
``is_debug()``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.igem.org/v1/"
DEFAULT_TIMEOUT = 30.0

_TRUTHY = {"1", "true", "yes", "on", "debug"}


@dataclass(frozen=True)
class Config:
    """Settings for talking to the upload service."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    team_id: int | None = None
    username: str | None = None
    password: str | None = None


def is_debug() -> bool:
    """True when IGEM_DEBUG is set to a truthy value."""
    return os.getenv("IGEM_DEBUG", "").strip().lower() in _TRUTHY


def get_config() -> Config:
    """Load configuration from environment variables.

    Raises:
        ValueError: If IGEM_TIMEOUT or IGEM_TEAM_ID is not a number
    """
    timeout_raw = os.getenv("IGEM_TIMEOUT")
    team_raw = os.getenv("IGEM_TEAM_ID")

    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT
    except ValueError as e:
        raise ValueError(f"IGEM_TIMEOUT must be a number, got {timeout_raw!r}") from e

    try:
        team_id = int(team_raw) if team_raw else None
    except ValueError as e:
        raise ValueError(f"IGEM_TEAM_ID must be an integer, got {team_raw!r}") from e

    return Config(
        api_url=os.getenv("IGEM_API_URL", DEFAULT_API_URL),
        timeout=timeout,
        team_id=team_id,
        username=os.getenv("IGEM_USERNAME") or None,
        password=os.getenv("IGEM_PASSWORD") or None,
    )
