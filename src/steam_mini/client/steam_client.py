"""Steam Web API client.

This client provides a small async interface to the Steam Web API with:
- A single request gateway that injects the API key and classifies responses
- Input validation before any network call is made
- Response shaping for game lists (derived image/store URLs, sorting, truncation)
- A tagged error hierarchy so callers can branch on the kind of failure
"""

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping

import httpx

from steam_mini.errors import DecodeError, TransportError, UserNotFoundError
from steam_mini.models import RecentGame, SteamUser, TopGame
from steam_mini.utils.shaping import shape_recent_game, shape_top_game
from steam_mini.utils.steam_id import validate_count, validate_steam_id

if TYPE_CHECKING:
    from steam_mini.config import Settings


logger = logging.getLogger(__name__)

BASE_URL = "https://api.steampowered.com"

# Relative paths of the upstream operations used by this client
ENDPOINTS: Mapping[str, str] = MappingProxyType(
    {
        "get_user": "/ISteamUser/GetPlayerSummaries/v0002/",
        "recently_played": "/IPlayerService/GetRecentlyPlayedGames/v0001/",
        "most_played": "/IPlayerService/GetOwnedGames/v0001/",
    }
)

# Known HTTP status codes and the message reported for each
STATUS_MESSAGES: Mapping[int, str] = MappingProxyType(
    {
        403: "Invalid API Key",
        404: "Invalid Steam ID",
        500: "Internal Server Error",
    }
)

GENERIC_FAILURE_MESSAGE = "An error occurred while making the request"
MISSING_KEY_MESSAGE = "API key not provided. Please provide an API key."

DEFAULT_RECENT_COUNT = 3
DEFAULT_TOP_COUNT = 3
MAX_TOP_COUNT = 10


class SteamClient:
    """Async client for the Steam Web API."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = BASE_URL,
        timeout: float | None = None,
    ):
        """
        Initialize Steam API client.

        Args:
            api_key: Steam Web API key. Required; the environment is not consulted.
            base_url: Base URL requests are made against.
            timeout: Transport timeout in seconds. None leaves requests unbounded.

        Raises:
            ValueError: If the API key is missing or empty.
        """
        if not api_key:
            raise ValueError(MISSING_KEY_MESSAGE)

        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SteamClient":
        """Build a client from loaded application settings."""
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def _build_url(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        base: str | None = None,
    ) -> str:
        """Build the full request URL, injecting the API key."""
        params = dict(params or {})
        if "key" in params:
            raise ValueError("The API key is added automatically; do not pass 'key'")

        query = {"key": self._api_key, **params, "format": "json"}
        base = (base or self._base_url).rstrip("/")
        return str(httpx.URL(f"{base}{endpoint}", params=query))

    async def request(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        base: str | None = None,
    ) -> Any:
        """
        Make a GET request to the Steam API and classify the response.

        Args:
            endpoint: Relative endpoint path (e.g. "/ISteamUser/GetPlayerSummaries/v0002/")
            params: Query parameters, excluding the API key
            base: Optional base URL overriding the client's own

        Returns:
            Decoded JSON for JSON responses, otherwise the raw text body

        Raises:
            TransportError: On network failures or non-200 responses
            DecodeError: If a JSON response cannot be decoded
        """
        url = self._build_url(endpoint, params, base)
        logger.debug(f"GET {endpoint}")

        try:
            # A fresh client per call keeps no connections tied to an event loop
            async with httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            ) as http:
                response = await http.get(url)
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}") from e

        status = response.status_code
        logger.debug(f"{endpoint} responded with {status}")

        if status in STATUS_MESSAGES:
            raise TransportError(STATUS_MESSAGES[status], status)
        if status != 200:
            raise TransportError(GENERIC_FAILURE_MESSAGE, status)

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            return response.text

        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON in Steam API response: {e}", status) from e

    async def _get_response(
        self, endpoint: str, params: Mapping[str, Any]
    ) -> dict[str, Any]:
        """Request an endpoint and unwrap its {"response": {...}} envelope."""
        data = await self.request(ENDPOINTS[endpoint], params)
        if not isinstance(data, dict) or not isinstance(data.get("response"), dict):
            raise DecodeError("Unexpected response format from Steam API")
        return data["response"]

    # Endpoint methods

    async def get_user(self, steam_id: str) -> SteamUser:
        """
        Get the profile summary of a single Steam user.

        Args:
            steam_id: SteamID64 (17 digits)

        Returns:
            Player summary as returned by Steam. Only "steamid" is guaranteed;
            other fields depend on the user's privacy settings.

        Raises:
            ValidationError: If the Steam ID is malformed
            UserNotFoundError: If Steam returns no player for the ID
            SteamAPIError: On any other API failure
        """
        validate_steam_id(steam_id)

        response = await self._get_response("get_user", {"steamids": steam_id})
        players = response.get("players") or []
        if not players:
            raise UserNotFoundError(f"No Steam user found for ID {steam_id}")
        return players[0]

    async def get_recently_played(
        self, steam_id: str, count: int = DEFAULT_RECENT_COUNT
    ) -> list[RecentGame]:
        """
        Get the games a user played in the last two weeks.

        Args:
            steam_id: SteamID64 (17 digits)
            count: Number of games to request (at least 1)

        Returns:
            Shaped game records with image and store URLs
        """
        validate_steam_id(steam_id)
        validate_count(count)

        response = await self._get_response(
            "recently_played", {"steamid": steam_id, "count": str(count)}
        )
        if response.get("total_count") == 0:
            return []
        return [shape_recent_game(game) for game in (response.get("games") or [])]

    async def get_top_games(
        self,
        steam_id: str,
        count: int = DEFAULT_TOP_COUNT,
        include_played_free_games: bool = False,
        include_appinfo: bool = True,
    ) -> list[TopGame]:
        """
        Get a user's most played owned games.

        Args:
            steam_id: SteamID64 (17 digits)
            count: Number of games to return, between 1 and 10
            include_played_free_games: Include free games the user has played
            include_appinfo: Ask Steam for names and icons of each game

        Returns:
            Shaped game records sorted by total playtime, most played first.
            Games with equal playtime keep Steam's order.
        """
        validate_steam_id(steam_id)
        validate_count(count, maximum=MAX_TOP_COUNT)

        response = await self._get_response(
            "most_played",
            {
                "steamid": steam_id,
                "count": str(count),
                "include_played_free_games": "1" if include_played_free_games else "0",
                "include_appinfo": "1" if include_appinfo else "0",
            },
        )
        if response.get("game_count") == 0:
            return []

        games = [shape_top_game(game) for game in (response.get("games") or [])]
        games.sort(key=lambda g: g["playtime"], reverse=True)
        return games[:count]

