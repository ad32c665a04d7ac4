"""Card and details-sheet lines built from an ETAInfo."""

from datetime import datetime

from hotshot.models import WEEKDAY_NAMES
from hotshot.status import format_time_12h

from .calculator import ETAInfo

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip


def format_trip_datetime(value: datetime) -> str:
    """e.g. ``Mon, Oct 5, 3:00 PM``."""
    day = WEEKDAY_NAMES[value.weekday()]
    month = MONTH_NAMES[value.month - 1]
    return f"{day}, {month} {value.day}, {format_time_12h(value)}"


def leaving_line(eta: ETAInfo) -> str:
    return f"Leaving {eta.origin_name} • {format_trip_datetime(eta.depart_at)}"


def arrival_line(eta: ETAInfo) -> str | None:
    if eta.eta_at is None:
        return None
    return f"ETA to {eta.dest_name} • {format_trip_datetime(eta.eta_at)} {eta.buffer_tag}"


def return_line(eta: ETAInfo) -> str | None:
    if eta.return_depart_at is None:
        return None
    return f"Return: leaving {eta.dest_name} • {format_trip_datetime(eta.return_depart_at)}"


def deliver_by_line(eta: ETAInfo) -> str:
    return f"Deliver by {format_trip_datetime(eta.depart_at)}"


def describe_trip(eta: ETAInfo | None) -> list[str]:
    """Details-sheet lines for a trip, or the card fallback when timing is unknown."""
    if eta is None:
        return ["Leaving time TBD"]
    lines = [leaving_line(eta)]
    for line in (arrival_line(eta), return_line(eta)):
        if line is not None:
            lines.append(line)
    return lines
