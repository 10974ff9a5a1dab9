"""Request orchestration for the track widget.

AuthAcquire -> FetchCurrent -> (Playing | NoneOrUnsupported) -> [FetchRecent] -> Respond
"""

from __future__ import annotations

import logging

import requests

from nowplaying.models import TrackDetails, parse_currently_playing, parse_recently_played
from nowplaying.observability.metrics import record_fallback, record_widget_outcome
from .errors import (
    SpotifyApiError,
    SpotifyAuthFailed,
    SpotifyResponseParseFailure,
    SpotifyTokenError,
    SpotifyUnexpectedResponse,
)
from .token_refresher import TokenRefresher
from .track_fetcher import TrackFetcher

logger = logging.getLogger(__name__)


class WidgetService:
    def __init__(self, refresher: TokenRefresher, fetcher: TrackFetcher):
        self.refresher = refresher
        self.fetcher = fetcher

    def get_track_details(self) -> TrackDetails:
        """Return what to show in the widget, raising WidgetError on primary-path failures."""
        try:
            token = self.refresher.get_valid_access_token()
        except SpotifyTokenError as e:
            logger.error("Failed to get valid access token: %s", e)
            record_widget_outcome("auth_failed")
            raise SpotifyAuthFailed() from e
        access_token = token.access_token

        try:
            response = self.fetcher.fetch_currently_playing(access_token)
        except requests.RequestException as e:
            logger.error("Failed to fetch currently playing track: %s", e)
            record_widget_outcome("api_error")
            raise SpotifyApiError() from e

        if response.status_code == 200:
            try:
                payload = response.json()
            except ValueError as e:
                logger.error("Failed to parse Spotify response: %s", e)
                record_widget_outcome("parse_failure")
                raise SpotifyResponseParseFailure() from e

            currently_playing = parse_currently_playing(payload)
            if currently_playing.item is not None:
                record_widget_outcome("playing")
                return currently_playing
            # Episode, ad or other non-track content
            logger.info("Currently playing item is not a track; falling back to recently played")
            return self._recently_played(access_token)

        if response.status_code == 204:
            return self._recently_played(access_token)

        logger.error("Unexpected response status: %s", response.status_code)
        record_widget_outcome("unexpected_response")
        raise SpotifyUnexpectedResponse()

    def _recently_played(self, access_token: str) -> TrackDetails:
        """Fallback path. Failures here degrade to an empty payload, never an error."""
        record_fallback()
        try:
            response = self.fetcher.fetch_recently_played(access_token)
            if response.status_code != 200:
                raise ValueError(f"Failed to fetch recently played tracks: {response.status_code}")
            recently_played = parse_recently_played(response.json())
        except (requests.RequestException, ValueError) as e:
            logger.warning("Failed to fetch recently played track: %s", e)
            record_widget_outcome("empty")
            return TrackDetails.empty()

        record_widget_outcome("recent" if recently_played.item is not None else "empty")
        return recently_played


__all__ = ["WidgetService"]
