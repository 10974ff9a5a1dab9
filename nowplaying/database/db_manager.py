# database/db_manager.py
from flask_sqlalchemy import SQLAlchemy
import os  # Import os for path handling
import logging
from sqlalchemy.engine import make_url

# Initialize the SQLAlchemy object
db = SQLAlchemy()
logger = logging.getLogger(__name__)


class SpotifyToken(db.Model):
    """The stored OAuth credential. Exactly one row is expected to exist."""

    __tablename__ = 'spotify_token'

    id = db.Column(db.Integer, primary_key=True)
    access_token = db.Column(db.Text, nullable=False)
    refresh_token = db.Column(db.Text, nullable=False)
    scope = db.Column(db.String(500), nullable=True)
    # Naive UTC timestamps
    expires_at = db.Column(db.DateTime, nullable=True)
    updated_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self) -> dict:
        """Serialize without the secrets, for /healthz."""
        return {
            'id': self.id,
            'scope': self.scope,
            'expires_at': self.expires_at.isoformat() if self.expires_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f'<SpotifyToken id={self.id} expires_at={self.expires_at}>'


def _engine_options(uri: str, pool_size: int) -> dict:
    """Bounded pool settings; in-memory SQLite keeps its single shared connection."""
    try:
        url = make_url(uri)
    except Exception:
        return {}
    if url.get_backend_name() == 'sqlite' and (not url.database or url.database == ':memory:'):
        return {}
    return {'pool_size': max(1, pool_size), 'max_overflow': 0}


def initialize_database(app):
    """
    Initializes the SQLAlchemy extension with the Flask app instance
    and creates all database tables if they don't already exist.
    """
    uri = app.config.get('SQLALCHEMY_DATABASE_URI')
    if uri and 'SQLALCHEMY_ENGINE_OPTIONS' not in app.config:
        pool_size = int(app.config.get('DB_POOL_SIZE', 5))
        app.config['SQLALCHEMY_ENGINE_OPTIONS'] = _engine_options(uri, pool_size)

    db.init_app(app)
    # Ensure the instance folder exists for SQLite database file
    instance_path = app.instance_path
    if not os.path.exists(instance_path):
        os.makedirs(instance_path)
        logger.info("Created instance folder: %s", instance_path)

    # Ensure the directory for the configured SQLite file exists
    try:
        if uri:
            url = make_url(uri)
            # Only handle file-based SQLite (not :memory:)
            if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
                db_dir = os.path.dirname(url.database)
                if db_dir and not os.path.exists(db_dir):
                    os.makedirs(db_dir, exist_ok=True)
                    logger.info("Created SQLite DB directory: %s", db_dir)
    except Exception as e:
        # Don't block app startup on path parsing issues; log and continue
        logger.warning("Could not ensure SQLite directory exists: %s", e)

    # Create database tables within the application context
    with app.app_context():
        db.create_all()
        logger.info("Database tables created or already exist.")
