from collections.abc import Sequence
from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from .models import WEEKDAY_NAMES, AvailabilityWindow

AVAILABLE_COLOR = "bg-green-100 text-green-800"
NEXT_COLOR = "bg-blue-100 text-blue-800"
UNAVAILABLE_COLOR = "bg-gray-100 text-gray-600"


class AvailabilityStatus(BaseModel):
    """Badge shown on a Hot Shot driver card."""

    type: Literal["available", "next", "unavailable"]
    text: str
    color_class: str


def _as_datetime(value: datetime | str | None) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def format_time_12h(value: datetime) -> str:
    """en-US short time, e.g. ``5:00 PM``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def format_availability_status(
    available_now: bool,
    available_until: datetime | str | None,
    next_available: datetime | str | None,
) -> AvailabilityStatus:
    """Pick the badge: available now, then next slot, then unavailable.

    Times are rendered in the timezone they carry, which for computed
    availability is the driver's schedule timezone.
    """
    until = _as_datetime(available_until)
    if available_now and until is not None:
        return AvailabilityStatus(
            type="available",
            text=f"Available now until {format_time_12h(until)}",
            color_class=AVAILABLE_COLOR,
        )

    upcoming = _as_datetime(next_available)
    if upcoming is not None:
        day = WEEKDAY_NAMES[upcoming.weekday()]
        return AvailabilityStatus(
            type="next",
            text=f"Next available: {day} {format_time_12h(upcoming)}",
            color_class=NEXT_COLOR,
        )

    return AvailabilityStatus(
        type="unavailable",
        text="No availability set",
        color_class=UNAVAILABLE_COLOR,
    )


def format_availability_windows(windows: Sequence[AvailabilityWindow]) -> str:
    if not windows:
        return "No schedule set"
    return " • ".join(f"{', '.join(w.days)}: {w.start}-{w.end}" for w in windows)
