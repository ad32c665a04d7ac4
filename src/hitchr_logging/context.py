"""Per-thread fields attached to every log record emitted inside a block.

Feed decoding logs per listing and Hot Shot publishing logs per driver;
wrapping that work in ``log_listing_context`` / ``log_driver_context``
tags each line without threading ids through every call.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


class LogContext:
    """Thread-local field store read by ``ContextFilter``."""

    _local = threading.local()

    @classmethod
    def get(cls) -> dict[str, Any]:
        fields: dict[str, Any] | None = getattr(cls._local, "fields", None)
        if fields is None:
            fields = cls._local.fields = {}
        return fields

    @classmethod
    def set(cls, **kwargs: Any) -> None:
        cls.get().update(kwargs)

    @classmethod
    def replace(cls, fields: dict[str, Any]) -> None:
        cls._local.fields = dict(fields)

    @classmethod
    def clear(cls) -> None:
        cls._local.fields = {}


class ContextFilter(logging.Filter):
    """Copies LogContext fields onto records; ``extra=`` values take precedence."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in LogContext.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Add fields for the duration of the block, restoring the outer set after."""
    outer = dict(LogContext.get())
    LogContext.set(**kwargs)
    try:
        yield
    finally:
        LogContext.replace(outer)


@contextmanager
def log_listing_context(listing_id: str, **kwargs: Any) -> Iterator[None]:
    """Tag records with a listing id; it doubles as the correlation id unless one is given."""
    kwargs.setdefault("correlation_id", listing_id)
    with log_context(listing_id=listing_id, **kwargs):
        yield


@contextmanager
def log_driver_context(driver_id: str | None, **kwargs: Any) -> Iterator[None]:
    kwargs.setdefault("correlation_id", driver_id or "-")
    with log_context(driver_id=driver_id, **kwargs):
        yield
