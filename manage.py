# manage.py
import sys

from app import create_app
from nowplaying.database.db_manager import db
from nowplaying.domain.spotify import TokenStore

USAGE = (
    "Usage:\n"
    "  python manage.py create_db\n"
    "  python manage.py set_token <refresh_token> [access_token] [scope]"
)


def create_db():
    """Creates the database tables."""
    app = create_app()
    with app.app_context():
        db.create_all()
        print(f"Database tables created at {app.config['SQLALCHEMY_DATABASE_URI']}")


def set_token(refresh_token, access_token="", scope=None):
    """Store the singleton credential; it is refreshed on the next widget request."""
    app = create_app()
    with app.app_context():
        token = TokenStore().save_credential(
            access_token=access_token,
            refresh_token=refresh_token,
            scope=scope,
            expires_at=None,
        )
        print(f"Stored Spotify credential id={token.id}")


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print("No command provided.")
        print(USAGE)
        sys.exit(1)

    command = sys.argv[1]
    if command == 'create_db':
        create_db()
    elif command == 'set_token':
        if len(sys.argv) < 3:
            print(USAGE)
            sys.exit(1)
        set_token(*sys.argv[2:5])
    else:
        print(f"Unknown command: {command}")
        print(USAGE)
        sys.exit(1)
