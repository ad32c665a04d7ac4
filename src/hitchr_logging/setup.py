import logging
import sys
from typing import TextIO

from settings import LoggingSettings

from .context import ContextFilter
from .filters import ContextDefaultsFilter, PIIFilter
from .formatters import DevFormatter, JSONFormatter


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    environment: str = "development",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Replace the root handlers with a single scrubbed, context-aware handler.

    Context is attached before defaults so a block's correlation id is not
    shadowed by the placeholder.
    """
    root = logging.getLogger()
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter(environment) if json_output else DevFormatter())
    handler.addFilter(ContextFilter())
    handler.addFilter(ContextDefaultsFilter())
    handler.addFilter(PIIFilter())

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))
    return handler


def setup_logging_from_settings(settings: LoggingSettings, stream: TextIO | None = None) -> logging.Handler:
    return setup_logging(
        level=settings.level,
        json_output=settings.format == "json",
        environment=settings.environment,
        stream=stream,
    )
