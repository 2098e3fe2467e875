"""Projection of raw Steam game records into consumer-friendly records."""

from typing import Any

from steam_mini.models import RecentGame, TopGame


ICON_URL_TEMPLATE = (
    "https://media.steampowered.com/steamcommunity/public/images/apps/{appid}/{icon}.jpg"
)
STORE_URL_TEMPLATE = "https://store.steampowered.com/app/{appid}"


def icon_url(appid: int | str, icon_hash: str | None) -> str | None:
    """Build the community icon URL, or None if Steam sent no icon hash."""
    if not icon_hash:
        return None
    return ICON_URL_TEMPLATE.format(appid=appid, icon=icon_hash)


def store_url(appid: int | str) -> str:
    return STORE_URL_TEMPLATE.format(appid=appid)


def shape_recent_game(game: dict[str, Any]) -> RecentGame:
    """Reduce a recently played game to id, name and derived URLs."""
    appid = game["appid"]
    return {
        "appid": appid,
        "name": game.get("name"),
        "image": icon_url(appid, game.get("img_icon_url")),
        "url": store_url(appid),
    }


def shape_top_game(game: dict[str, Any]) -> TopGame:
    """Like shape_recent_game, plus total playtime in minutes."""
    appid = game["appid"]
    return {
        "appid": appid,
        "name": game.get("name"),
        "image": icon_url(appid, game.get("img_icon_url")),
        "url": store_url(appid),
        "playtime": game.get("playtime_forever", 0),
    }
