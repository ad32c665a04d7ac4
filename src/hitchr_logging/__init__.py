from .context import ContextFilter, LogContext, log_context, log_driver_context, log_listing_context
from .filters import ContextDefaultsFilter, PIIFilter
from .formatters import DevFormatter, JSONFormatter
from .setup import setup_logging, setup_logging_from_settings

__all__ = [
    "ContextDefaultsFilter",
    "ContextFilter",
    "DevFormatter",
    "JSONFormatter",
    "LogContext",
    "PIIFilter",
    "log_context",
    "log_driver_context",
    "log_listing_context",
    "setup_logging",
    "setup_logging_from_settings",
]
