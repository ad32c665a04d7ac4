"""Exception hierarchy for the marketplace core.

Pricing, ETA, availability and filtering never raise; missing data yields
None or empty results. These exceptions belong to the edges that read or
write outside data: the listing store, the environment read by
``get_settings`` and Hot Shot publishing.
"""

from typing import Any


class HitchrError(Exception):
    """Base exception for all marketplace core errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransientError(HitchrError):
    """Errors that may succeed on retry."""

    pass


class StoreUnavailableError(TransientError):
    """The hosted record store could not be reached or timed out."""

    pass


class PermanentError(HitchrError):
    """Errors that will not succeed on retry."""

    pass


class ValidationError(PermanentError):
    """Invalid input. ``details`` maps field name to a user-facing message."""

    pass


class ConfigurationError(PermanentError):
    """Missing or invalid configuration."""

    pass


class NotFoundError(PermanentError):
    """Requested record does not exist in the store."""

    pass
