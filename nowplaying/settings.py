#!/usr/bin/env python
"""
Typed runtime settings for the widget service.

Built once from config.Config at application start and handed to each
component's constructor.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from config import Config


class WidgetSettings(BaseModel):
    """Immutable settings shared by the token and track components."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    # Spotify application credentials
    spotify_client_id: str = ""
    spotify_client_secret: str = ""

    # Upstream endpoints
    api_base_url: str = "https://api.spotify.com/v1"
    token_url: str = "https://accounts.spotify.com/api/token"
    market: str = "IN"
    http_timeout: Optional[float] = None

    # Admission check
    api_access_key: Optional[str] = None

    @field_validator("spotify_client_id", "spotify_client_secret", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("api_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: object) -> str:
        return str(value or "").rstrip("/")

    @field_validator("market", mode="before")
    @classmethod
    def _normalize_market(cls, value: object) -> str:
        market = str(value or "").strip().upper()
        return market or "IN"

    @field_validator("http_timeout", mode="before")
    @classmethod
    def _coerce_timeout(cls, value: object) -> Optional[float]:
        if value in (None, ""):
            return None
        try:
            timeout = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return None
        return timeout if timeout > 0 else None

    @field_validator("api_access_key", mode="before")
    @classmethod
    def _blank_key_is_unset(cls, value: object) -> Optional[str]:
        if value is None:
            return None
        key = str(value).strip()
        return key or None


def load_widget_settings(overrides: Optional[Dict[str, Any]] = None) -> WidgetSettings:
    """Load settings from Config, merged with optional runtime overrides."""
    data: Dict[str, Any] = {
        "spotify_client_id": Config.SPOTIFY_CLIENT_ID,
        "spotify_client_secret": Config.SPOTIFY_CLIENT_SECRET,
        "api_base_url": Config.SPOTIFY_API_BASE_URL,
        "token_url": Config.SPOTIFY_TOKEN_URL,
        "market": Config.SPOTIFY_MARKET,
        "http_timeout": Config.SPOTIFY_HTTP_TIMEOUT_SECONDS,
        "api_access_key": Config.API_ACCESS_KEY,
    }
    if overrides:
        data.update(overrides)
    return WidgetSettings.model_validate(data)


__all__ = [
    "WidgetSettings",
    "load_widget_settings",
]
