from __future__ import annotations

from flask import Blueprint, jsonify
from sqlalchemy import text

from nowplaying.database.db_manager import SpotifyToken, db

health_bp = Blueprint("health_bp", __name__)


def _credential_stored() -> bool:
    return db.session.query(SpotifyToken.id).first() is not None


@health_bp.route("/healthz")
def healthz():
    status = 200
    checks = {}

    try:
        db.session.execute(text("SELECT 1"))
        checks["database"] = "ok"
        token = db.session.query(SpotifyToken).order_by(SpotifyToken.id).first()
        checks["credential"] = "present" if token is not None else "missing"
        if token is not None:
            checks["token"] = token.to_dict()
    except Exception as exc:  # pragma: no cover - DB failure path
        db.session.rollback()
        status = 503
        checks["database"] = f"error: {exc}"

    overall = "ok" if status == 200 else "degraded"
    return jsonify({"status": overall, "checks": checks}), status


@health_bp.route("/readyz")
def readyz():
    try:
        ready = _credential_stored()
    except Exception:  # pragma: no cover - DB failure path
        db.session.rollback()
        ready = False
    status = 200 if ready else 503
    return jsonify({"status": "ready" if ready else "blocked", "credential_stored": ready}), status
