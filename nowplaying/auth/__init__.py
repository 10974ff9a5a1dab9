#!/usr/bin/env python
"""Bearer API-key admission check for the public widget endpoints."""

from __future__ import annotations

import hmac
import logging
from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request

from nowplaying.models import ErrorResponse

logger = logging.getLogger(__name__)


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _unauthorized(details: str):
    body = ErrorResponse(code="UNAUTHORIZED", message="Invalid api access key", details=details)
    return jsonify(body.model_dump()), 401


def require_api_key(view):
    """Reject requests whose bearer token does not match API_ACCESS_KEY."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        settings = current_app.extensions["widget_settings"]
        expected = settings.api_access_key
        if not expected:
            logger.error("API_ACCESS_KEY is not configured; rejecting %s", request.path)
            return _unauthorized("API access key is not configured on the server")

        supplied = _bearer_token()
        if supplied is None:
            return _unauthorized("Expected an 'Authorization: Bearer <key>' header")
        if not hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8")):
            logger.warning("Rejected widget request with invalid api access key")
            return _unauthorized("The supplied api access key does not match")
        return view(*args, **kwargs)

    return wrapper


__all__ = ["require_api_key"]
