"""Publishing a driver's Hot Shot offer as an availability listing.

The driver's profile owns the ``HotShotConfig``. Publishing copies it onto
a ``DriverAvailability`` record together with the availability status
computed at that moment, so feed readers never need the profile.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Protocol

import pydantic

from core.exceptions import NotFoundError, StoreUnavailableError, ValidationError
from hitchr_logging import log_driver_context
from listings.decoder import AVAILABILITY_ENTITY
from listings.models import DriverProfile
from settings import HotShotSettings

from .availability import compute_schedule_availability
from .models import HotShotConfig, HotShotPostConfig

logger = logging.getLogger(__name__)

MIN_DISTANCE_KM, MAX_DISTANCE_KM = 1, 500
MIN_TIME_MIN, MAX_TIME_MIN = 5, 600


class RecordWriter(Protocol):
    def create(self, entity: str, data: dict[str, Any]) -> dict[str, Any]: ...

    def update(self, entity: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]: ...


def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def parse_hot_shot_config(data: Mapping[str, Any]) -> HotShotConfig:
    """Validate a submitted settings form, collecting field -> message details."""
    try:
        return HotShotConfig.model_validate(data)
    except pydantic.ValidationError as e:
        details = {".".join(str(p) for p in err["loc"]): err["msg"] for err in e.errors()}
        raise ValidationError("Invalid Hot Shot configuration", details=details) from e


def publish_errors(config: HotShotConfig) -> dict[str, str]:
    """Rules a config must meet before it can go live (stricter than storage)."""
    errors: dict[str, str] = {}
    loc = config.base_location
    if loc is None or not loc.label:
        errors["baseLocation"] = "Base location is required"
    if not MIN_DISTANCE_KM <= config.max_distance_km <= MAX_DISTANCE_KM:
        errors["maxDistance"] = f"Distance must be between {MIN_DISTANCE_KM}-{MAX_DISTANCE_KM} km"
    if not MIN_TIME_MIN <= config.max_time_min <= MAX_TIME_MIN:
        errors["maxTime"] = f"Time must be between {MIN_TIME_MIN}-{MAX_TIME_MIN} minutes"
    if not config.availability.windows:
        errors["availability"] = "At least one availability window is required"
    return errors


def build_hot_shot_post(
    driver: DriverProfile,
    config: HotShotConfig,
    now: datetime,
    settings: HotShotSettings | None = None,
) -> dict[str, Any]:
    """Availability record payload for a live Hot Shot offer.

    Raises:
        ValidationError: the config fails ``publish_errors``.
    """
    errors = publish_errors(config)
    if errors:
        raise ValidationError("Hot Shot configuration is incomplete", details=errors)

    base = config.base_location
    status = compute_schedule_availability(config.availability, now=now, settings=settings)
    embedded = HotShotPostConfig(
        max_distance_km=config.max_distance_km,
        max_time_min=config.max_time_min,
        base_fee_cad=config.base_fee_cad,
        notes=config.notes,
        availability=config.availability,
        available_now=status.available_now,
        available_until=status.available_until,
        next_available=status.next_available,
    )

    return {
        "driver_id": driver.id,
        "driver_profile_id": driver.id,
        "driver_snapshot": {
            "name": driver.display_name,
            "email": driver.email,
            "vehicle_type": driver.vehicle_type,
        },
        "from_address": base.label,
        "from_latitude": base.lat,
        "from_longitude": base.lng,
        "to_address": base.label,
        "to_latitude": base.lat,
        "to_longitude": base.lng,
        "depart_at": now.isoformat(),
        "hot_shot": True,
        "hot_shot_config": embedded.model_dump(mode="json", by_alias=True),
        "vehicle_type": driver.vehicle_type,
        "capacities": list(driver.categories_served),
        "min_fee": config.base_fee_cad,
        "notes": (
            f"Hot Shot: {config.notes or 'Available for special trips'}. "
            f"Max {_num(config.max_distance_km)}km, {_num(config.max_time_min)}min."
        ),
        "status": "active",
    }


def build_pause_payload() -> dict[str, Any]:
    return {"status": "paused"}


class HotShotPublisher:
    """Keeps a driver's single Hot Shot availability post in step with their config."""

    def __init__(self, writer: RecordWriter, settings: HotShotSettings | None = None):
        self.writer = writer
        self.settings = settings or HotShotSettings()

    def save(self, driver: DriverProfile, config: HotShotConfig, now: datetime) -> HotShotConfig:
        """Publish (enabled) or pause (disabled); returns the config to store on the profile.

        An existing post is updated in place. If it has vanished from the
        store a fresh post is created and its id recorded instead.
        """
        with log_driver_context(driver.id):
            if not config.enabled:
                self._pause(config)
                return config

            payload = build_hot_shot_post(driver, config, now, self.settings)
            post_id = config.post_id
            if post_id:
                try:
                    self.writer.update(AVAILABILITY_ENTITY, post_id, payload)
                    logger.info(f"Updated Hot Shot post {post_id}")
                    return config
                except NotFoundError:
                    logger.warning(f"Hot Shot post {post_id} no longer exists, creating a new one")

            created = self.writer.create(AVAILABILITY_ENTITY, payload)
            logger.info(f"Created Hot Shot post {created.get('id')}")
            return config.model_copy(update={"post_id": created.get("id")})

    def _pause(self, config: HotShotConfig) -> None:
        # post_id is kept so re-enabling updates the same listing
        if not config.post_id:
            return
        try:
            self.writer.update(AVAILABILITY_ENTITY, config.post_id, build_pause_payload())
            logger.info(f"Paused Hot Shot post {config.post_id}")
        except (NotFoundError, StoreUnavailableError) as e:
            logger.error(f"Failed to pause Hot Shot post {config.post_id}: {e.message}")
