"""Environment-based configuration for the Steam Mini MCP server.

The library itself never reads the environment; settings are only loaded
by entry points such as the MCP server.
"""

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from steam_mini.client.steam_client import BASE_URL


@dataclass(frozen=True)
class Settings:
    """Server settings loaded from environment variables."""

    api_key: str | None = None
    base_url: str = BASE_URL
    timeout: float | None = None
    log_level: str = "INFO"


def _parse_timeout(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        timeout = float(value)
    except ValueError as e:
        raise ValueError(f"STEAM_TIMEOUT must be a number of seconds, got {value!r}") from e
    if timeout <= 0:
        raise ValueError("STEAM_TIMEOUT must be positive")
    return timeout


def get_settings(load_env_file: bool = True) -> Settings:
    """
    Load settings from the environment.

    Args:
        load_env_file: Whether to read a .env file first (existing
            environment variables take precedence).

    Returns:
        Settings instance
    """
    if load_env_file:
        load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        api_key=os.getenv("STEAM_API_KEY") or None,
        base_url=os.getenv("STEAM_API_BASE_URL", BASE_URL),
        timeout=_parse_timeout(os.getenv("STEAM_TIMEOUT")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
