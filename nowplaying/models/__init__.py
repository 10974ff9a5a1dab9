from .dto import Album, AlbumImage, Artist, ErrorResponse, Track, TrackDetails
from .normalizer import (
    parse_album,
    parse_album_images,
    parse_artists,
    parse_currently_playing,
    parse_recently_played,
    parse_track,
)

__all__ = [
    "Album",
    "AlbumImage",
    "Artist",
    "ErrorResponse",
    "Track",
    "TrackDetails",
    "parse_album",
    "parse_album_images",
    "parse_artists",
    "parse_currently_playing",
    "parse_recently_played",
    "parse_track",
]
