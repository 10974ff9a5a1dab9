from __future__ import annotations

from flask import Blueprint, Response, g, has_app_context
from prometheus_client import Counter, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

WIDGET_OUTCOMES = (
    "playing",
    "recent",
    "empty",
    "auth_failed",
    "api_error",
    "parse_failure",
    "unexpected_response",
)

WIDGET_RESPONSES = Counter(
    "nowplaying_widget_responses_total",
    "Track widget responses by outcome.",
    ["outcome"],
)
TOKEN_REFRESHES = Counter(
    "nowplaying_token_refresh_total",
    "Spotify refresh-token grants attempted, by result.",
    ["result"],
)
FALLBACKS = Counter(
    "nowplaying_fallback_total",
    "Requests that fell back to the recently-played endpoint.",
)

# Expose every outcome from the first scrape
for _outcome in WIDGET_OUTCOMES:
    WIDGET_RESPONSES.labels(outcome=_outcome)


def record_widget_outcome(outcome: str) -> None:
    WIDGET_RESPONSES.labels(outcome=outcome).inc()
    if has_app_context():
        # Picked up by the request log filter
        g.widget_outcome = outcome


def record_token_refresh(success: bool) -> None:
    TOKEN_REFRESHES.labels(result="success" if success else "failure").inc()


def record_fallback() -> None:
    FALLBACKS.inc()


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
