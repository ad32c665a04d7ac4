"""Hot Shot availability: is the driver open right now, and if not, when next.

Everything is evaluated in the schedule's own timezone so a driver in
Vancouver is judged by Vancouver wall-clock time no matter where the
caller runs. Callers pass ``now`` explicitly; a whole filter pass should
share one value so every driver is judged against the same instant.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel

from settings import HotShotSettings

from .models import WEEKDAY_NAMES, AvailabilitySchedule, AvailabilityWindow

logger = logging.getLogger(__name__)


class AvailabilityResult(BaseModel):
    available_now: bool
    available_until: datetime | None = None
    next_available: datetime | None = None


def resolve_timezone(name: str | None, settings: HotShotSettings | None = None) -> tzinfo:
    """Look up a schedule timezone, falling back to the marketplace default."""
    settings = settings or HotShotSettings()
    for candidate in (name, settings.default_timezone):
        if not candidate:
            continue
        try:
            return ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {candidate!r}, falling back")
    return UTC


def to_local(now: datetime, tz: tzinfo) -> datetime:
    """Express ``now`` in ``tz``. Naive values are taken as wall time in ``tz``."""
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def is_within_time_window(now: datetime, window: AvailabilityWindow) -> bool:
    """Minute-granularity check with both bounds inclusive.

    ``now`` must already be in the schedule's local time.
    """
    if weekday_name(now.date()) not in window.days:
        return False
    now_minutes = now.hour * 60 + now.minute
    return window.start_minutes <= now_minutes <= window.end_minutes


def _at(day: date, hhmm_minutes: int, tz: tzinfo) -> datetime:
    hours, minutes = divmod(hhmm_minutes, 60)
    return datetime.combine(day, time(hours, minutes), tzinfo=tz)


def find_next_available(
    windows: Sequence[AvailabilityWindow],
    blackout_dates: Iterable[date],
    local_now: datetime,
    lookahead_days: int,
) -> datetime | None:
    """Earliest window start strictly after ``local_now``.

    Searches ``lookahead_days`` calendar days starting with today and skips
    blacked-out dates entirely.
    """
    blackouts = set(blackout_dates)
    tz = local_now.tzinfo
    today = local_now.date()

    for offset in range(lookahead_days):
        day = today + timedelta(days=offset)
        if day in blackouts:
            continue

        name = weekday_name(day)
        starts = sorted(w.start_minutes for w in windows if name in w.days)
        for start_minutes in starts:
            candidate = _at(day, start_minutes, tz)
            if candidate > local_now:
                return candidate

    return None


def compute_availability(
    windows: Sequence[AvailabilityWindow],
    blackout_dates: Iterable[date] = (),
    timezone: str | None = None,
    now: datetime | None = None,
    settings: HotShotSettings | None = None,
) -> AvailabilityResult:
    """Resolve whether a driver is available now, until when, or when next."""
    if not windows:
        return AvailabilityResult(available_now=False, next_available=None)

    settings = settings or HotShotSettings()
    tz = resolve_timezone(timezone, settings)
    local_now = to_local(now or datetime.now(UTC), tz)
    blackouts = set(blackout_dates)

    if local_now.date() not in blackouts:
        for window in windows:
            if is_within_time_window(local_now, window):
                return AvailabilityResult(
                    available_now=True,
                    available_until=_at(local_now.date(), window.end_minutes, tz),
                )

    return AvailabilityResult(
        available_now=False,
        next_available=find_next_available(
            windows, blackouts, local_now, settings.lookahead_days
        ),
    )


def compute_schedule_availability(
    schedule: AvailabilitySchedule,
    now: datetime | None = None,
    settings: HotShotSettings | None = None,
) -> AvailabilityResult:
    return compute_availability(
        schedule.windows,
        schedule.blackout_dates,
        timezone=schedule.timezone,
        now=now,
        settings=settings,
    )
