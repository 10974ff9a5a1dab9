#!/usr/bin/env python
"""
Pydantic DTOs for the track widget API.

These are value objects rebuilt from upstream JSON on every request and
never persisted.
"""

from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, Field


class Artist(BaseModel):
    id: str = ""
    name: str = ""


class AlbumImage(BaseModel):
    url: str = ""
    height: Optional[int] = Field(default=None, ge=0)
    width: Optional[int] = Field(default=None, ge=0)


class Album(BaseModel):
    id: str = ""
    name: str = ""
    artists: List[Artist] = Field(default_factory=list)
    images: List[AlbumImage] = Field(default_factory=list)


class Track(BaseModel):
    id: str = ""
    name: str = ""
    album: Album = Field(default_factory=Album)
    artists: List[Artist] = Field(default_factory=list)
    explicit: bool = False
    preview_url: Optional[str] = None
    duration_ms: int = Field(default=0, ge=0)
    popularity: int = Field(default=0, ge=0, le=255)


class TrackDetails(BaseModel):
    """What the widget renders: the current or most recent track."""

    item: Optional[Track] = None
    is_playing: bool = False
    played_at: Optional[str] = None

    @classmethod
    def empty(cls) -> "TrackDetails":
        return cls(item=None, is_playing=False, played_at=None)


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Optional[str] = None


__all__ = ["Artist", "AlbumImage", "Album", "Track", "TrackDetails", "ErrorResponse"]
