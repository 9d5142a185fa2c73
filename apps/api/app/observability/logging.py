import json
import logging
from datetime import UTC, datetime
from typing import Any

from app.core.config import settings

_LOGGING_CONFIGURED = False

# httpx logs every outbound request at INFO; our own events already cover them.
_QUIET_LOGGERS = ("httpx", "httpcore")


class JsonLogFormatter(logging.Formatter):
    _extra_fields = (
        "event_name",
        "request_id",
        "method",
        "path",
        "status",
        "latency_ms",
        "upstream_status",
        "error_kind",
        "branch",
        "product_id",
        "transaction_id",
        "grant_state",
        "configured_level",
    )

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in self._extra_fields:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)


def _resolve_level(level_name: str) -> int:
    level = logging.getLevelName(level_name.upper())
    if isinstance(level, int):
        return level

    logging.getLogger("openpayments.logging").warning(
        "invalid_log_level_fallback",
        extra={
            "event_name": "invalid_log_level_fallback",
            "configured_level": level_name,
        },
    )
    return logging.INFO


def configure_logging(level_name: str | None = None) -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level_name or settings.log_level))

    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter())
    root_logger.handlers = [handler]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
