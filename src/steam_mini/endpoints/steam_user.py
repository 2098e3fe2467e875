"""ISteamUser API endpoints.

Reference: https://partner.steamgames.com/doc/webapi/ISteamUser
"""

from steam_mini.endpoints.base import BaseEndpoint, endpoint


class ISteamUser(BaseEndpoint):
    """ISteamUser API endpoints for player profile data."""

    @endpoint(
        name="get_user",
        description=(
            "Get a Steam user's profile summary: display name, avatar, profile URL, "
            "online state and, depending on privacy settings, current game and locale."
        ),
        params={
            "steam_id": {
                "type": "string",
                "description": "SteamID64 of the user (exactly 17 digits)",
                "required": True,
            },
        },
    )
    async def get_user(self, steam_id: str) -> str:
        """Get player summary for a Steam user."""
        return await self.render(self.client.get_user(steam_id))
