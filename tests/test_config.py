import importlib

import pytest


@pytest.fixture
def reloaded():
    """Reload config and settings after env changes, then put the original Config back."""
    import config as _config
    import nowplaying.settings as settings

    original = _config.Config

    def _reload():
        importlib.reload(_config)
        importlib.reload(settings)
        return _config, settings

    yield _reload
    # app.py and the conftest patches hold the original class
    _config.Config = original
    settings.Config = original


def test_load_widget_settings_uses_current_config(monkeypatch, reloaded):
    monkeypatch.setenv("SPOTIFY_CLIENT_ID", "abc")
    monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "def")
    monkeypatch.setenv("SPOTIFY_MARKET", "us")
    monkeypatch.setenv("SPOTIFY_API_BASE_URL", "http://localhost:9000/v1/")
    monkeypatch.setenv("SPOTIFY_HTTP_TIMEOUT_SECONDS", "7.5")
    monkeypatch.setenv("API_ACCESS_KEY", "  widget-key ")
    monkeypatch.setenv("DB_POOL_SIZE", "3")

    _config, settings = reloaded()
    s = settings.load_widget_settings()

    assert s.spotify_client_id == _config.Config.SPOTIFY_CLIENT_ID == "abc"
    assert s.spotify_client_secret == "def"
    assert s.market == "US"
    assert s.api_base_url == "http://localhost:9000/v1"
    assert s.http_timeout == 7.5
    assert s.api_access_key == "widget-key"
    assert _config.Config.DB_POOL_SIZE == 3


def test_defaults_preserve_blocking_calls_and_india_market(monkeypatch, reloaded):
    for name in ("SPOTIFY_MARKET", "SPOTIFY_HTTP_TIMEOUT_SECONDS", "SPOTIFY_API_BASE_URL",
                 "SPOTIFY_TOKEN_URL", "API_ACCESS_KEY", "DB_POOL_SIZE"):
        monkeypatch.delenv(name, raising=False)

    _config, settings = reloaded()
    s = settings.load_widget_settings()

    assert s.market == "IN"
    assert s.http_timeout is None
    assert s.api_base_url == "https://api.spotify.com/v1"
    assert s.token_url == "https://accounts.spotify.com/api/token"
    assert s.api_access_key is None
    assert _config.Config.DB_POOL_SIZE == 5


@pytest.mark.parametrize("raw", ["0", "-1", "soon", ""])
def test_invalid_timeout_means_no_timeout(monkeypatch, reloaded, raw):
    monkeypatch.setenv("SPOTIFY_HTTP_TIMEOUT_SECONDS", raw)
    _config, settings = reloaded()
    assert settings.load_widget_settings().http_timeout is None


def test_overrides_win_and_settings_are_frozen():
    from nowplaying.settings import load_widget_settings

    s = load_widget_settings({"market": "gb", "spotify_client_id": None})
    assert s.market == "GB"
    assert s.spotify_client_id == ""
    with pytest.raises(Exception):
        s.market = "US"
