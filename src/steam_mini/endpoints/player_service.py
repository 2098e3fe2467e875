"""IPlayerService API endpoints.

This module provides MCP tools for a player's recently played and most
played games.

Reference: https://partner.steamgames.com/doc/webapi/IPlayerService
"""

from steam_mini.client.steam_client import (
    DEFAULT_RECENT_COUNT,
    DEFAULT_TOP_COUNT,
    MAX_TOP_COUNT,
)
from steam_mini.endpoints.base import BaseEndpoint, endpoint


class IPlayerService(BaseEndpoint):
    """IPlayerService API endpoints for player game data."""

    @endpoint(
        name="get_recently_played",
        description=(
            "Get games a player has played in the last 2 weeks, with icon and "
            "store page URLs for each game."
        ),
        params={
            "steam_id": {
                "type": "string",
                "description": "SteamID64 of the user (exactly 17 digits)",
                "required": True,
            },
            "count": {
                "type": "integer",
                "description": "Number of games to return",
                "required": False,
                "default": DEFAULT_RECENT_COUNT,
                "minimum": 1,
            },
        },
    )
    async def get_recently_played(
        self, steam_id: str, count: int = DEFAULT_RECENT_COUNT
    ) -> str:
        """Get recently played games for a Steam user."""
        return await self.render(self.client.get_recently_played(steam_id, count))

    @endpoint(
        name="get_top_games",
        description=(
            "Get a player's most played owned games, sorted by total playtime "
            "(minutes). Only works for public profiles."
        ),
        params={
            "steam_id": {
                "type": "string",
                "description": "SteamID64 of the user (exactly 17 digits)",
                "required": True,
            },
            "count": {
                "type": "integer",
                "description": f"Number of games to return (1-{MAX_TOP_COUNT})",
                "required": False,
                "default": DEFAULT_TOP_COUNT,
                "minimum": 1,
                "maximum": MAX_TOP_COUNT,
            },
            "include_played_free_games": {
                "type": "boolean",
                "description": "Include free-to-play games the player has played",
                "required": False,
                "default": False,
            },
            "include_appinfo": {
                "type": "boolean",
                "description": "Include game names and icons",
                "required": False,
                "default": True,
            },
        },
    )
    async def get_top_games(
        self,
        steam_id: str,
        count: int = DEFAULT_TOP_COUNT,
        include_played_free_games: bool = False,
        include_appinfo: bool = True,
    ) -> str:
        """Get most played games for a Steam user."""
        return await self.render(
            self.client.get_top_games(
                steam_id,
                count,
                include_played_free_games=include_played_free_games,
                include_appinfo=include_appinfo,
            )
        )
