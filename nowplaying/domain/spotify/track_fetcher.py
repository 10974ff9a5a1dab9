import logging
from typing import Optional

import requests

from nowplaying.settings import WidgetSettings

logger = logging.getLogger(__name__)


class TrackFetcher:
    """Raw calls to the Spotify player endpoints. One round trip each, no retries."""

    def __init__(self, settings: WidgetSettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.http = session or requests.Session()

    def _get(self, path: str, access_token: str, params: dict) -> requests.Response:
        url = f"{self.settings.api_base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        return self.http.get(
            url,
            params=params,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=self.settings.http_timeout,
        )

    def fetch_currently_playing(self, access_token: str) -> requests.Response:
        return self._get(
            "/me/player/currently-playing",
            access_token,
            {"market": self.settings.market},
        )

    def fetch_recently_played(self, access_token: str) -> requests.Response:
        return self._get(
            "/me/player/recently-played",
            access_token,
            {"limit": 1, "market": self.settings.market},
        )


__all__ = ["TrackFetcher"]
