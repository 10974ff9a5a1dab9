import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flask import g, has_app_context, has_request_context, request

# Request attributes copied onto every record, in output order
REQUEST_FIELDS = ("request_id", "method", "path", "origin", "widget_outcome")


def _request_fields() -> Dict[str, Optional[str]]:
    fields: Dict[str, Optional[str]] = dict.fromkeys(REQUEST_FIELDS)
    if has_app_context():
        fields["request_id"] = getattr(g, "request_id", None)
        fields["widget_outcome"] = getattr(g, "widget_outcome", None)
    if has_request_context():
        fields["method"] = request.method
        fields["path"] = request.path
        # The embedding page, as sent by browsers on cross-origin widget fetches
        fields["origin"] = request.headers.get("Origin")
    return fields


class RequestContextFilter(logging.Filter):
    """Stamp records with the widget request they were emitted under."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name, value in _request_fields().items():
            setattr(record, name, value)
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per line; request fields are omitted outside a request."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "ts": stamp.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in REQUEST_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_structured_logging(app) -> None:
    """Attach the JSON stdout handler to the root logger once per process."""
    root = logging.getLogger()
    if any(isinstance(h.formatter, JsonFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestContextFilter())
    root.addHandler(handler)
    app.logger.debug("Structured logging attached to root logger")
