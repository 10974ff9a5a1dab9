import os
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'nowplaying' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import factories as test_factories
from tests.support import stubs as test_stubs

API_KEY = "test-widget-key"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path_factory):
    """Ensure a clean config for tests with per-test sqlite files."""
    import config as cfg

    db_dir = tmp_path_factory.mktemp("db")
    db_path = Path(db_dir) / "test.sqlite"
    monkeypatch.setattr(cfg.Config, "SQLALCHEMY_DATABASE_URI", f"sqlite:///{db_path.as_posix()}", raising=True)
    monkeypatch.setattr(cfg.Config, "SPOTIFY_CLIENT_ID", "test-client-id", raising=True)
    monkeypatch.setattr(cfg.Config, "SPOTIFY_CLIENT_SECRET", "test-client-secret", raising=True)
    monkeypatch.setattr(cfg.Config, "API_ACCESS_KEY", API_KEY, raising=True)
    yield


@pytest.fixture
def spotify_http():
    """Stubbed Spotify endpoints shared by the refresher and the fetcher."""
    return test_stubs.SpotifyHttpStub()


@pytest.fixture
def app(spotify_http):
    import app as app_module

    application = app_module.create_app(http_session=spotify_http)
    yield application


@pytest.fixture
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture
def db_session(app_context):
    from nowplaying.database.db_manager import db

    test_factories.set_session(db.session)
    try:
        yield db.session
    finally:
        try:
            db.session.rollback()
        except Exception:
            pass
        db.session.remove()
        test_factories.reset_session()


@pytest.fixture
def factories(db_session):
    yield test_factories


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {API_KEY}"}
