"""Centralized feed configuration.

Settings come from the environment, optionally seeded from a .env file:
    FEEDSHEETS_USERNAME     - login passed to the feed service
    FEEDSHEETS_PASSWORD     - password passed to the feed service
    FEEDSHEETS_TOKEN        - bearer token (takes precedence over the login)
    FEEDSHEETS_FEED_ROOT    - feed root URL (default: https://spreadsheets.google.com/feeds)
    FEEDSHEETS_WRITE_DELAY  - seconds to pause between row inserts
    FEEDSHEETS_KEY          - default spreadsheet key for the CLI
    FEEDSHEETS_TITLE        - default spreadsheet title for the CLI

The .env file defaults to ./.env and can be moved with FEEDSHEETS_ENV_FILE.
It is loaded on import; variables already in the environment win.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_FEED_ROOT = "https://spreadsheets.google.com/feeds"

ENV_FILE = Path(os.environ.get("FEEDSHEETS_ENV_FILE", ".env"))


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _load_env_file(env_path: Path) -> dict[str, str]:
    """Seed ``os.environ`` from a .env file.

    Lines are ``KEY=value``; an optional ``export`` prefix and matching quotes
    around the value are stripped. Blank lines and ``#`` comments are skipped.
    Lines that are not assignments are logged and skipped.

    Returns:
        The variables that were set, i.e. those not already in the environment.
    """
    if not env_path.is_file():
        return {}

    loaded = {}
    with open(env_path, encoding="utf-8") as f:
        for number, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            key, sep, value = line.removeprefix("export ").partition("=")
            key = key.strip()
            if not sep or not key:
                logger.warning(f"{env_path}:{number}: ignoring line without KEY=value")
                continue

            if key in os.environ:
                continue
            os.environ[key] = loaded[key] = _unquote(value.strip())

    if loaded:
        logger.debug(f"Loaded {', '.join(sorted(loaded))} from {env_path}")
    return loaded


@dataclass(frozen=True)
class FeedEndpoints:
    """Feed scopes for one spreadsheet service."""

    spreadsheets: str
    worksheets: str
    cells: str
    rows: str

    @classmethod
    def from_root(cls, root: str) -> FeedEndpoints:
        """Derive every feed scope from a feed root URL."""
        root = root.rstrip("/")
        return cls(
            spreadsheets=f"{root}/spreadsheets",
            worksheets=f"{root}/worksheets",
            cells=f"{root}/cells",
            rows=f"{root}/list",
        )

    @classmethod
    def from_env(cls) -> FeedEndpoints:
        return cls.from_root(os.environ.get("FEEDSHEETS_FEED_ROOT", DEFAULT_FEED_ROOT))


def get_write_delay(default: float) -> float:
    """Read FEEDSHEETS_WRITE_DELAY, falling back to ``default``.

    Raises:
        ValueError: If the variable is set but not a number.
    """
    value = os.environ.get("FEEDSHEETS_WRITE_DELAY")
    if not value:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"FEEDSHEETS_WRITE_DELAY must be a number, got {value!r}") from e


def get_config_status() -> dict:
    """Get status of the feed configuration.

    Returns:
        Dictionary with configuration status. Secrets are reported as set/unset only.
    """
    return {
        "env_file": str(ENV_FILE),
        "env_file_exists": ENV_FILE.exists(),
        "feed_root": os.environ.get("FEEDSHEETS_FEED_ROOT", DEFAULT_FEED_ROOT),
        "credentials": {
            "username": bool(os.environ.get("FEEDSHEETS_USERNAME")),
            "password": bool(os.environ.get("FEEDSHEETS_PASSWORD")),
            "token": bool(os.environ.get("FEEDSHEETS_TOKEN")),
        },
        "write_delay": os.environ.get("FEEDSHEETS_WRITE_DELAY"),
    }


# Auto-load .env on import
_loaded = _load_env_file(ENV_FILE)
