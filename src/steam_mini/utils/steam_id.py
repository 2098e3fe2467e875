"""Input validation for Steam IDs and result counts.

Only SteamID64 values are accepted: exactly 17 ASCII digits, with no sign,
whitespace or other formatting. Validation runs before any request is made.
"""

import re

from steam_mini.errors import ValidationError


STEAMID64_PATTERN = re.compile(r"[0-9]{17}")

INVALID_STEAM_ID_MESSAGE = "Invalid Steam ID was provided."


def is_valid_steam_id(steam_id: object) -> bool:
    """Check whether a value is a well-formed SteamID64 string."""
    return isinstance(steam_id, str) and STEAMID64_PATTERN.fullmatch(steam_id) is not None


def validate_steam_id(steam_id: object) -> str:
    """
    Validate a SteamID64.

    Args:
        steam_id: Value to check

    Returns:
        The Steam ID, unchanged

    Raises:
        ValidationError: If the value is not exactly 17 decimal digits
    """
    if not is_valid_steam_id(steam_id):
        raise ValidationError(INVALID_STEAM_ID_MESSAGE)
    return steam_id  # type: ignore[return-value]


def validate_count(count: object, minimum: int = 1, maximum: int | None = None) -> int:
    """
    Validate a result count against an inclusive range.

    Args:
        count: Requested number of results
        minimum: Smallest accepted value
        maximum: Largest accepted value, or None for no upper bound

    Returns:
        The count, unchanged

    Raises:
        ValidationError: If the count is not an integer within range
    """
    if maximum is None:
        message = f"Count must be at least {minimum}."
    else:
        message = f"Count must be between {minimum} and {maximum}."

    # bool is an int subclass; True/False are not counts
    if not isinstance(count, int) or isinstance(count, bool):
        raise ValidationError(message)
    if count < minimum or (maximum is not None and count > maximum):
        raise ValidationError(message)
    return count
