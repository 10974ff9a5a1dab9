import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from nowplaying.database.db_manager import SpotifyToken, db
from .errors import NoTokenFound, TokenStoreError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Naive UTC now, matching how timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TokenStore:
    """Reads and writes the singleton Spotify credential row."""

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def get_credential(self) -> SpotifyToken:
        """Return the stored credential or raise NoTokenFound."""
        try:
            token = self.session.query(SpotifyToken).order_by(SpotifyToken.id).first()
        except SQLAlchemyError as exc:
            logger.error("Failed to read Spotify credential: %s", exc, exc_info=True)
            raise TokenStoreError(f"Database error: {exc}") from exc
        if token is None:
            raise NoTokenFound()
        return token

    def update_credential(
        self,
        token_id: int,
        access_token: str,
        refresh_token: str,
        expires_at: Optional[datetime],
        updated_at: Optional[datetime],
    ) -> SpotifyToken:
        """Overwrite the token fields of row ``token_id`` in one commit."""
        session = self.session
        try:
            token = session.get(SpotifyToken, token_id)
            if token is None:
                raise TokenStoreError(f"Spotify credential {token_id} disappeared during refresh")
            token.access_token = access_token
            token.refresh_token = refresh_token
            token.expires_at = expires_at
            token.updated_at = updated_at
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Failed to update Spotify credential %s: %s", token_id, exc, exc_info=True)
            raise TokenStoreError(f"Database error: {exc}") from exc
        session.refresh(token)
        return token

    def save_credential(
        self,
        access_token: str,
        refresh_token: str,
        scope: Optional[str] = None,
        expires_at: Optional[datetime] = None,
    ) -> SpotifyToken:
        """Seed or replace the credential, reusing the existing row if any."""
        if not refresh_token:
            raise ValueError("refresh_token must not be empty")
        session = self.session
        try:
            token = session.query(SpotifyToken).order_by(SpotifyToken.id).first()
            if token is None:
                token = SpotifyToken()
                session.add(token)
            token.access_token = access_token or ""
            token.refresh_token = refresh_token
            token.scope = scope
            token.expires_at = expires_at
            token.updated_at = utcnow()
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Failed to save Spotify credential: %s", exc, exc_info=True)
            raise TokenStoreError(f"Database error: {exc}") from exc
        logger.info("Stored Spotify credential %s", token.id)
        return token


__all__ = ["TokenStore", "utcnow"]
