#!/usr/bin/env python
"""
Upstream player JSON -> TrackDetails conversion.

Spotify's payload differs between content types (track vs. episode) and
has drifted across API versions, so every field is read with a default
instead of validating the document as a whole. None of these functions
raise, whatever shape the input has.
"""

from __future__ import annotations

from typing import Any, List, Optional

from .dto import Album, AlbumImage, Artist, Track, TrackDetails

_UINT8_MAX = 255


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _str(obj: dict, key: str) -> str:
    value = obj.get(key)
    return value if isinstance(value, str) else ""


def _opt_str(obj: dict, key: str) -> Optional[str]:
    value = obj.get(key)
    return value if isinstance(value, str) else None


def _bool(obj: dict, key: str) -> bool:
    value = obj.get(key)
    return value if isinstance(value, bool) else False


def _opt_uint(obj: dict, key: str) -> Optional[int]:
    value = obj.get(key)
    # bool is an int subclass; JSON true is not a number
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def _uint(obj: dict, key: str) -> int:
    value = _opt_uint(obj, key)
    return 0 if value is None else value


def parse_artists(value: Any) -> List[Artist]:
    artists = []
    for entry in _as_list(value):
        data = _as_dict(entry)
        artists.append(Artist(id=_str(data, "id"), name=_str(data, "name")))
    return artists


def parse_album_images(value: Any) -> List[AlbumImage]:
    images = []
    for entry in _as_list(value):
        data = _as_dict(entry)
        images.append(
            AlbumImage(
                url=_str(data, "url"),
                height=_opt_uint(data, "height"),
                width=_opt_uint(data, "width"),
            )
        )
    return images


def parse_album(value: Any) -> Album:
    data = _as_dict(value)
    return Album(
        id=_str(data, "id"),
        name=_str(data, "name"),
        artists=parse_artists(data.get("artists")),
        images=parse_album_images(data.get("images")),
    )


def parse_track(value: Any) -> Track:
    data = _as_dict(value)
    popularity = _uint(data, "popularity")
    if popularity > _UINT8_MAX:
        popularity = 0
    return Track(
        id=_str(data, "id"),
        name=_str(data, "name"),
        album=parse_album(data.get("album")),
        artists=parse_artists(data.get("artists")),
        explicit=_bool(data, "explicit"),
        preview_url=_opt_str(data, "preview_url"),
        duration_ms=_uint(data, "duration_ms"),
        popularity=popularity,
    )


def parse_currently_playing(payload: Any) -> TrackDetails:
    """Map /me/player/currently-playing. Non-track items (episodes, ads) yield item=None."""
    data = _as_dict(payload)
    item_data = data.get("item")
    item = None
    if isinstance(item_data, dict) and item_data.get("type") == "track":
        item = parse_track(item_data)
    return TrackDetails(item=item, is_playing=_bool(data, "is_playing"), played_at=None)


def parse_recently_played(payload: Any) -> TrackDetails:
    """Map /me/player/recently-played using only the most recent entry."""
    items = _as_list(_as_dict(payload).get("items"))
    if not items:
        return TrackDetails.empty()

    most_recent = _as_dict(items[0])
    track_data = most_recent.get("track")
    item = parse_track(track_data) if isinstance(track_data, dict) else None
    return TrackDetails(
        item=item,
        is_playing=False,
        played_at=_opt_str(most_recent, "played_at"),
    )


__all__ = [
    "parse_currently_playing",
    "parse_recently_played",
    "parse_track",
    "parse_album",
    "parse_artists",
    "parse_album_images",
]
