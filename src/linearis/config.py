"""Shared linearis configuration utilities.

Centralises API token lookup and transport settings so every command reads
them through one implementation.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values

from linearis.errors import AuthenticationError

# ---------------------------------------------------------------------------
# Low-level sources
# ---------------------------------------------------------------------------

LINEAR_API_URL = "https://api.linear.app/graphql"
TOKEN_FILE = Path.home() / ".linear_api_token"
TOKEN_ENV_VARS = ("LINEAR_API_TOKEN", "LINEAR_API_KEY")
DEFAULT_TIMEOUT = 30.0


def _read_env(name: str, dotenv_path: Path | None = None) -> str | None:
    """Read a variable from os.environ, falling back to a .env file."""
    value = os.environ.get(name)
    if value:
        return value
    path = dotenv_path or Path.cwd() / ".env"
    if path.exists():
        return dotenv_values(path).get(name) or None
    return None


def _read_token_file(path: Path) -> str | None:
    if not path.exists():
        return None
    try:
        return path.read_text(encoding="utf-8").strip() or None
    except OSError:
        return None


# ---------------------------------------------------------------------------
# Derived helpers
# ---------------------------------------------------------------------------


def get_api_token(
    explicit: str | None = None,
    token_file: Path | None = None,
    dotenv_path: Path | None = None,
) -> str:
    """Return the Linear API token.

    Precedence: explicit ``--api-token`` value, LINEAR_API_TOKEN,
    LINEAR_API_KEY, then ``~/.linear_api_token``.
    """
    if explicit:
        return explicit
    for name in TOKEN_ENV_VARS:
        value = _read_env(name, dotenv_path)
        if value:
            return value.strip()
    token = _read_token_file(token_file or TOKEN_FILE)
    if token:
        return token
    raise AuthenticationError(
        "No API token found. Use --api-token, set LINEAR_API_TOKEN, "
        f"or write the token to {TOKEN_FILE}. "
        "Get an API key at https://linear.app/settings/api"
    )


def get_timeout() -> float:
    raw = _read_env("LINEARIS_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT


def get_api_url() -> str:
    return _read_env("LINEAR_API_URL") or LINEAR_API_URL


def get_log_level() -> str:
    return (_read_env("LINEARIS_LOG_LEVEL") or "WARNING").upper()


# ---------------------------------------------------------------------------
# ClientConfig – shared by every command
# ---------------------------------------------------------------------------


@dataclass
class ClientConfig:
    """Transport configuration for one CLI invocation."""

    api_token: str
    api_url: str = field(default_factory=get_api_url)
    timeout: float = field(default_factory=get_timeout)
