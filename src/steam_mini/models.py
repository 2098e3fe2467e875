"""Typed shapes of Steam API records.

Raw records mirror what Steam returns; most fields may be missing depending
on the user's privacy settings and the request options.
"""

from typing import TypedDict


class _SteamUserBase(TypedDict):
    steamid: str


class SteamUser(_SteamUserBase, total=False):
    """Player summary from ISteamUser/GetPlayerSummaries."""

    personaname: str
    profileurl: str
    avatar: str
    avatarmedium: str
    avatarfull: str
    personastate: int
    communityvisibilitystate: int
    profilestate: int
    lastlogoff: int
    commentpermission: int
    realname: str
    primaryclanid: str
    timecreated: int
    gameid: str
    gameserverip: str
    gameextrainfo: str
    loccountrycode: str
    locstatecode: str
    loccityid: int


class SteamGame(TypedDict, total=False):
    """Game entry from IPlayerService owned/recent game lists."""

    appid: int
    name: str
    img_icon_url: str
    img_logo_url: str
    playtime_forever: int
    playtime_2weeks: int
    playtime_windows_forever: int
    playtime_mac_forever: int
    playtime_linux_forever: int


class RecentGame(TypedDict):
    appid: int
    name: str | None
    image: str | None
    url: str


class TopGame(RecentGame):
    playtime: int
