"""Factory Boy factories for database models used in tests."""

from datetime import timedelta

import factory
from factory.alchemy import SQLAlchemyModelFactory

from nowplaying.database.db_manager import SpotifyToken
from nowplaying.domain.spotify.token_store import utcnow


class _BaseFactory(SQLAlchemyModelFactory):
    class Meta:
        abstract = True
        sqlalchemy_session = None
        sqlalchemy_session_persistence = "commit"


class SpotifyTokenFactory(_BaseFactory):
    class Meta:
        model = SpotifyToken

    access_token = factory.Sequence(lambda n: f"access-{n}")
    refresh_token = factory.Sequence(lambda n: f"refresh-{n}")
    scope = "user-read-currently-playing user-read-recently-played"
    expires_at = factory.LazyFunction(lambda: utcnow() + timedelta(hours=1))
    updated_at = factory.LazyFunction(utcnow)


_FACTORIES = [SpotifyTokenFactory]


def set_session(session):
    for factory_cls in _FACTORIES:
        factory_cls._meta.sqlalchemy_session = session


def reset_session():
    for factory_cls in _FACTORIES:
        factory_cls._meta.sqlalchemy_session = None


__all__ = [
    "SpotifyTokenFactory",
    "set_session",
    "reset_session",
]
