"""Shared test stubs standing in for the Spotify HTTP endpoints."""

import json
from typing import Any, Dict, List, Optional

import requests


class FakeResponse:
    """Just enough of requests.Response for the token and player clients."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        if text is None:
            text = "" if payload is None else json.dumps(payload)
        self.text = text

    def json(self):
        return json.loads(self.text)


def token_response(access_token: str = "new-access", refresh_token: Optional[str] = None,
                   expires_in: Optional[int] = 3600) -> FakeResponse:
    body: Dict[str, Any] = {"access_token": access_token, "token_type": "Bearer"}
    if refresh_token is not None:
        body["refresh_token"] = refresh_token
    if expires_in is not None:
        body["expires_in"] = expires_in
    return FakeResponse(200, body)


class SpotifyHttpStub:
    """requests.Session stand-in routing by endpoint name.

    Queue responses (or exceptions to raise) per endpoint; each call pops the
    next one, and the last queued entry is reused once the queue runs dry.
    """

    ROUTES = {
        "token": "/api/token",
        "currently_playing": "/me/player/currently-playing",
        "recently_played": "/me/player/recently-played",
    }

    def __init__(self):
        self._queues: Dict[str, List[Any]] = {name: [] for name in self.ROUTES}
        self.calls: List[Dict[str, Any]] = []

    def queue(self, endpoint: str, *outcomes: Any) -> "SpotifyHttpStub":
        self._queues[endpoint].extend(outcomes)
        return self

    def calls_to(self, endpoint: str) -> List[Dict[str, Any]]:
        return [call for call in self.calls if call["endpoint"] == endpoint]

    def _dispatch(self, method: str, url: str, **kwargs) -> FakeResponse:
        endpoint = next(
            (name for name, path in self.ROUTES.items() if path in url),
            None,
        )
        if endpoint is None:
            raise AssertionError(f"Unexpected {method} {url}")
        self.calls.append({"endpoint": endpoint, "method": method, "url": url, **kwargs})
        queue = self._queues[endpoint]
        if not queue:
            raise AssertionError(f"No response queued for {endpoint}")
        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def get(self, url, **kwargs):
        return self._dispatch("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._dispatch("POST", url, **kwargs)


def connection_error(message: str = "connection refused") -> requests.ConnectionError:
    return requests.ConnectionError(message)


def track_payload(track_id: str = "t1", name: str = "Song", **overrides) -> Dict[str, Any]:
    track = {
        "type": "track",
        "id": track_id,
        "name": name,
        "album": {
            "id": "al1",
            "name": "Album",
            "artists": [{"id": "ar1", "name": "Artist"}],
            "images": [{"url": "http://img/al1.jpg", "height": 640, "width": 640}],
        },
        "artists": [{"id": "ar1", "name": "Artist"}],
        "explicit": False,
        "preview_url": None,
        "duration_ms": 1000,
        "popularity": 50,
    }
    track.update(overrides)
    return track


def recently_played_payload(track: Optional[Dict[str, Any]] = None,
                            played_at: str = "2024-01-01T00:00:00Z") -> Dict[str, Any]:
    return {"items": [{"played_at": played_at, "track": track or track_payload()}]}
