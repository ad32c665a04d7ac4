from .availability import AvailabilityResult, compute_availability, is_within_time_window
from .models import (
    AvailabilitySchedule,
    AvailabilityWindow,
    BaseLocation,
    HotShotConfig,
    HotShotPostConfig,
)
from .status import AvailabilityStatus, format_availability_status, format_availability_windows

__all__ = [
    "AvailabilityResult",
    "AvailabilitySchedule",
    "AvailabilityStatus",
    "AvailabilityWindow",
    "BaseLocation",
    "HotShotConfig",
    "HotShotPostConfig",
    "compute_availability",
    "format_availability_status",
    "format_availability_windows",
    "is_within_time_window",
]
