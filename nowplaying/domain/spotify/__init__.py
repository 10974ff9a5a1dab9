"""Spotify credential lifecycle and now-playing lookup."""

from .errors import (
    NoTokenFound,
    RefreshFailed,
    SpotifyApiError,
    SpotifyAuthFailed,
    SpotifyResponseParseFailure,
    SpotifyTokenError,
    SpotifyUnexpectedResponse,
    TokenHttpError,
    TokenStoreError,
    WidgetError,
)
from .token_store import TokenStore
from .token_refresher import TokenRefresher
from .track_fetcher import TrackFetcher
from .widget_service import WidgetService


def build_widget_service(settings, session=None) -> WidgetService:
    """Wire store, refresher and fetcher around one shared HTTP session."""
    import requests

    http = session or requests.Session()
    store = TokenStore()
    refresher = TokenRefresher(store=store, settings=settings, session=http)
    fetcher = TrackFetcher(settings=settings, session=http)
    return WidgetService(refresher=refresher, fetcher=fetcher)


__all__ = [
    "NoTokenFound",
    "RefreshFailed",
    "SpotifyApiError",
    "SpotifyAuthFailed",
    "SpotifyResponseParseFailure",
    "SpotifyTokenError",
    "SpotifyUnexpectedResponse",
    "TokenHttpError",
    "TokenStoreError",
    "WidgetError",
    "TokenStore",
    "TokenRefresher",
    "TrackFetcher",
    "WidgetService",
    "build_widget_service",
]
