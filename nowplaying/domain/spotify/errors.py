"""Error types raised by the credential lifecycle and the widget flow."""

from __future__ import annotations

from typing import Optional

from nowplaying.models.dto import ErrorResponse


class SpotifyTokenError(Exception):
    """Base class for anything that prevents obtaining a usable access token."""


class NoTokenFound(SpotifyTokenError):
    def __init__(self) -> None:
        super().__init__("No Spotify token found in database")


class RefreshFailed(SpotifyTokenError):
    """Upstream rejected the refresh-token grant."""

    def __init__(self, body: str, status_code: Optional[int] = None) -> None:
        self.body = body
        self.status_code = status_code
        super().__init__(f"Token refresh failed: {body}")


class TokenHttpError(SpotifyTokenError):
    """Transport failure or unreadable body from the token endpoint."""


class TokenStoreError(SpotifyTokenError):
    """The credential row could not be read or written."""


class WidgetError(Exception):
    """A terminal widget failure carrying its HTTP mapping."""

    status_code = 500
    code = "INTERNAL_ERROR"
    message = "Internal server error"

    def to_dict(self) -> dict:
        return ErrorResponse(code=self.code, message=self.message, details=None).model_dump()


class SpotifyAuthFailed(WidgetError):
    status_code = 401
    code = "SPOTIFY_AUTH_FAILED"
    message = "Failed to authenticate with Spotify"


class SpotifyApiError(WidgetError):
    code = "SPOTIFY_API_ERROR"
    message = "Failed to connect to Spotify API"


class SpotifyResponseParseFailure(WidgetError):
    code = "SPOTIFY_RESPONSE_PARSE_FAILURE"
    message = "Failed to parse Spotify response"


class SpotifyUnexpectedResponse(WidgetError):
    code = "SPOTIFY_UNEXPECTED_RESPONSE"
    message = "Unexpected response from Spotify API"


__all__ = [
    "SpotifyTokenError",
    "NoTokenFound",
    "RefreshFailed",
    "TokenHttpError",
    "TokenStoreError",
    "WidgetError",
    "SpotifyAuthFailed",
    "SpotifyApiError",
    "SpotifyResponseParseFailure",
    "SpotifyUnexpectedResponse",
]
