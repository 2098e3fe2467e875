"""Steam API client module."""

from .steam_client import SteamClient, ENDPOINTS, STATUS_MESSAGES

__all__ = ["SteamClient", "ENDPOINTS", "STATUS_MESSAGES"]
