from .db_manager import SpotifyToken, db, initialize_database

__all__ = ["SpotifyToken", "db", "initialize_database"]
