"""Process configuration for the Master Tour MCP server.

Credentials come from the environment (optionally seeded by a project-root
``.env`` file) and are validated once at startup.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from mastertour_mcp.constants import (
    ENV_CONSUMER_KEY,
    ENV_CONSUMER_SECRET,
    ENV_DEFAULT_TOUR_ID,
)
from mastertour_mcp.models import Credentials

ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class ConfigError(RuntimeError):
    """Raised when required environment variables are missing."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Set these in your .env file or environment."
        )
        self.missing = missing


@dataclass(frozen=True)
class Config:
    credentials: Credentials
    default_tour_id: str | None = None


def load_env_file(path: Path = ENV_FILE) -> None:
    """Seed ``os.environ`` from a simple KEY=VALUE file without overriding."""
    if not path.is_file():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            k, _, v = line.partition("=")
            os.environ.setdefault(k.strip(), v.strip())


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Build a Config from the environment, naming every missing variable."""
    env = os.environ if environ is None else environ
    consumer_key = env.get(ENV_CONSUMER_KEY, "").strip()
    consumer_secret = env.get(ENV_CONSUMER_SECRET, "").strip()
    default_tour_id = env.get(ENV_DEFAULT_TOUR_ID, "").strip()

    missing: list[str] = []
    if not consumer_key:
        missing.append(ENV_CONSUMER_KEY)
    if not consumer_secret:
        missing.append(ENV_CONSUMER_SECRET)
    if missing:
        raise ConfigError(missing)

    return Config(
        credentials=Credentials(consumer_key, consumer_secret),
        default_tour_id=default_tour_id or None,
    )


def resolve_tour_id(input_tour_id: str | None, config: Config) -> str:
    """Return the explicit tour id, else the configured default."""
    tour_id = (input_tour_id or "").strip() or config.default_tour_id
    if not tour_id:
        raise ValueError(
            "tourId is required. Provide it as input or set "
            f"{ENV_DEFAULT_TOUR_ID} environment variable."
        )
    return tour_id
