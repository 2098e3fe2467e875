"""Error types raised by the Steam client.

Every failure surfaces as a SteamAPIError subclass. The ``kind`` attribute
names the failure category so callers can branch without matching on
message text.
"""


class SteamAPIError(Exception):
    """Base exception for Steam API errors."""

    kind = "error"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(SteamAPIError):
    """Raised when an argument is rejected before any request is made."""

    kind = "validation"


class TransportError(SteamAPIError):
    """Raised on network failures and non-success HTTP statuses.

    ``status_code`` is None when no HTTP response was received.
    """

    kind = "transport"


class DecodeError(SteamAPIError):
    """Raised when a response body cannot be decoded as expected."""

    kind = "decode"


class UserNotFoundError(SteamAPIError):
    """Raised when Steam returns no player for a well-formed Steam ID."""

    kind = "not_found"
