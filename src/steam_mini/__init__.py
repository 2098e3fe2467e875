"""Steam Mini - a small async client for the Steam Web API."""

from steam_mini.client import SteamClient
from steam_mini.errors import (
    DecodeError,
    SteamAPIError,
    TransportError,
    UserNotFoundError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "SteamClient",
    "SteamAPIError",
    "ValidationError",
    "TransportError",
    "DecodeError",
    "UserNotFoundError",
]
