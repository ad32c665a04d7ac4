"""JSON output for deployed environments and a compact console format."""

import json
import logging
from datetime import UTC, datetime

CONTEXT_FIELDS = ("listing_id", "driver_id", "request_id", "correlation_id")

_PLACEHOLDER = "-"


def _context_of(record: logging.LogRecord) -> dict[str, object]:
    fields = {}
    for field in CONTEXT_FIELDS:
        value = getattr(record, field, None)
        if value is not None and value != _PLACEHOLDER:
            fields[field] = value
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per line, stamped with the record's creation time."""

    def __init__(self, environment: str = "development"):
        super().__init__()
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "env": self.environment,
            **_context_of(record),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class DevFormatter(logging.Formatter):
    """Console lines with any listing/driver context in brackets after the logger name."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-8s %(name)s%(context)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        fields = _context_of(record)
        record.context = (
            " [" + " ".join(f"{k}={v}" for k, v in fields.items()) + "]" if fields else ""
        )
        return super().format(record)
