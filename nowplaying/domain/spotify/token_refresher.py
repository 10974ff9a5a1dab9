"""Refresh-token lifecycle for the stored Spotify credential."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nowplaying.database.db_manager import SpotifyToken
from nowplaying.observability.metrics import record_token_refresh
from nowplaying.settings import WidgetSettings
from .errors import RefreshFailed, TokenHttpError
from .token_store import TokenStore, utcnow

logger = logging.getLogger(__name__)

MAX_EXPIRES_IN_SECONDS = 365 * 24 * 60 * 60


class RefreshResponse(BaseModel):
    """Body of a successful refresh-token grant."""

    model_config = ConfigDict(extra="ignore")

    access_token: str
    refresh_token: Optional[str] = None
    # Spotify grants last an hour; longer lifetimes are malformed
    expires_in: Optional[int] = Field(default=None, ge=0, le=MAX_EXPIRES_IN_SECONDS)


class TokenRefresher:
    """Keeps the stored access token usable by exchanging the refresh token.

    Concurrent requests that see an expired token each refresh it on their
    own and the last write wins; every refresh yields a usable token, so
    duplicates only cost an extra round trip.
    """

    def __init__(
        self,
        store: TokenStore,
        settings: WidgetSettings,
        session: Optional[requests.Session] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.settings = settings
        self.http = session or requests.Session()
        self._clock = clock or utcnow

    def now(self) -> datetime:
        return self._clock()

    def needs_refresh(self, credential: SpotifyToken) -> bool:
        if credential.expires_at is None:
            return True
        return self.now() >= credential.expires_at

    def get_valid_access_token(self) -> SpotifyToken:
        """Load the stored credential and refresh it when expired."""
        return self.ensure_valid(self.store.get_credential())

    def ensure_valid(self, credential: SpotifyToken) -> SpotifyToken:
        if not self.needs_refresh(credential):
            return credential
        logger.info(
            "Spotify access token expired (expires_at=%s); refreshing credential %s",
            credential.expires_at, credential.id,
        )
        return self.refresh(credential)

    def refresh(self, credential: SpotifyToken) -> SpotifyToken:
        form = {
            "grant_type": "refresh_token",
            "refresh_token": credential.refresh_token,
            "client_id": self.settings.spotify_client_id,
            "client_secret": self.settings.spotify_client_secret,
        }
        try:
            response = self.http.post(
                self.settings.token_url,
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.settings.http_timeout,
            )
        except requests.RequestException as exc:
            record_token_refresh(False)
            logger.error("Token refresh request failed: %s", exc, exc_info=True)
            raise TokenHttpError(f"HTTP error: {exc}") from exc

        if not 200 <= response.status_code < 300:
            body = response.text or "Unknown error"
            record_token_refresh(False)
            logger.error("Spotify rejected token refresh (%s): %s", response.status_code, body)
            raise RefreshFailed(body, status_code=response.status_code)

        try:
            payload = RefreshResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            record_token_refresh(False)
            logger.error("Unreadable token refresh response: %s", exc)
            raise TokenHttpError(f"HTTP error: invalid refresh response: {exc}") from exc

        now = self.now()
        expires_at = None
        if payload.expires_in is not None:
            expires_at = now + timedelta(seconds=payload.expires_in)
        # Spotify may not rotate the refresh token
        new_refresh_token = payload.refresh_token or credential.refresh_token

        updated = self.store.update_credential(
            credential.id,
            access_token=payload.access_token,
            refresh_token=new_refresh_token,
            expires_at=expires_at,
            updated_at=now,
        )
        record_token_refresh(True)
        logger.info("Spotify credential %s refreshed; expires_at=%s", updated.id, expires_at)
        return updated


__all__ = ["RefreshResponse", "TokenRefresher"]
