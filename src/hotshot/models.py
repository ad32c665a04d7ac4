"""Hot Shot configuration owned by a driver profile.

Stored records use camelCase keys (``maxDistanceKm``, ``blackoutDates``);
models accept either spelling and dump back to camelCase with
``by_alias=True``.
"""

import re
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

Weekday = Literal["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Python weekday() order: Monday == 0
WEEKDAY_NAMES: tuple[Weekday, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def minutes_of_day(hhmm: str) -> int:
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AvailabilityWindow(_CamelModel):
    """Recurring weekly window, e.g. Mon/Wed 09:00-17:00. Never spans midnight."""

    days: list[Weekday] = Field(min_length=1)
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def validate_hhmm(cls, v: str) -> str:
        if not _HHMM.match(v):
            raise ValueError(f"Time must be HH:MM (24h), got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_order(self) -> "AvailabilityWindow":
        if self.start_minutes >= self.end_minutes:
            raise ValueError("End time must be after start time")
        return self

    @property
    def start_minutes(self) -> int:
        return minutes_of_day(self.start)

    @property
    def end_minutes(self) -> int:
        return minutes_of_day(self.end)


class AvailabilitySchedule(_CamelModel):
    timezone: str = "America/Vancouver"
    windows: list[AvailabilityWindow] = Field(default_factory=list)
    blackout_dates: list[date] = Field(default_factory=list)


class BaseLocation(_CamelModel):
    lat: float
    lng: float
    label: str = ""


class HotShotConfig(_CamelModel):
    """A driver's standing Hot Shot offer, as saved on their profile."""

    enabled: bool = False
    post_id: str | None = None
    base_location: BaseLocation | None = None
    max_distance_km: float = Field(default=50, gt=0)
    max_time_min: float = Field(default=60, gt=0)
    base_fee_cad: float = Field(default=25, ge=0)
    notes: str = Field(default="", max_length=120)
    availability: AvailabilitySchedule = Field(default_factory=AvailabilitySchedule)


class HotShotPostConfig(_CamelModel):
    """Copy of the config embedded on a published availability listing.

    Carries the availability status computed at publish time so listing
    readers do not need the driver's profile.
    """

    max_distance_km: float | None = None
    max_time_min: float | None = None
    base_fee_cad: float | None = None
    notes: str = ""
    availability: AvailabilitySchedule | None = None
    available_now: bool = False
    available_until: datetime | None = None
    next_available: datetime | None = None
