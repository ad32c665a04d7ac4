"""Decode raw store rows into listings, once, at the fetch boundary.

Rows come from the hosted backend as loose JSON objects. Everything past
this module works on ``DeliveryRequest`` / ``DriverListing`` only.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

import pydantic

from core.exceptions import StoreUnavailableError
from hitchr_logging import log_listing_context
from hotshot.models import HotShotConfig

from .models import DeliveryRequest, DriverAvailability, DriverListing, DriverProfile
from .pipeline import ViewerMode

logger = logging.getLogger(__name__)

REQUEST_ENTITY = "Request"
AVAILABILITY_ENTITY = "DriverAvailability"
PROFILE_ENTITY = "DriverProfile"

OPEN_REQUEST_STATUS = "open"
ACTIVE_AVAILABILITY_STATUS = "active"

Row = Mapping[str, Any]


class ListingStore(Protocol):
    """The slice of the hosted record store the feed reads from."""

    def list(self, entity: str) -> list[dict[str, Any]]: ...


def _keep(row: Row, status: str, include_test_data: bool) -> bool:
    if row.get("status") != status:
        return False
    return include_test_data or not row.get("is_test_data")


def decode_request(row: Row) -> DeliveryRequest | None:
    snapshot = row.get("sender_snapshot") or {}
    poster_name = snapshot.get("name") or row.get("sender_profile_id") or "Sender"
    try:
        return DeliveryRequest.model_validate({**row, "poster_name": poster_name})
    except pydantic.ValidationError as e:
        with log_listing_context(str(row.get("id", "-"))):
            logger.warning(f"Skipping malformed request: {e.error_count()} invalid field(s)")
        return None


def _decode_hot_shot_config(row: Row) -> HotShotConfig | None:
    """Disabled configs are stored unvalidated and may hold half-edited windows."""
    raw = row.get("hotshot")
    if raw is None:
        return None
    try:
        return HotShotConfig.model_validate(raw)
    except pydantic.ValidationError as e:
        with log_listing_context(str(row.get("id", "-")), driver_id=row.get("id")):
            logger.warning(f"Ignoring invalid Hot Shot config: {e.error_count()} invalid field(s)")
        return None


def decode_profile(row: Row) -> DriverProfile | None:
    """Profiles without a known location cannot be placed on the feed.

    The stored Hot Shot config never decides whether a profile decodes; an
    invalid one is dropped with a warning.
    """
    location = row.get("location") or {}
    lat, lng = location.get("lat"), location.get("lng")
    if lat is None or lng is None:
        return None
    data = {k: v for k, v in row.items() if v is not None and k != "hotshot"}
    data.update(current_latitude=lat, current_longitude=lng)
    try:
        profile = DriverProfile.model_validate(data)
    except pydantic.ValidationError as e:
        with log_listing_context(str(row.get("id", "-")), driver_id=row.get("id")):
            logger.warning(f"Skipping malformed driver profile: {e.error_count()} invalid field(s)")
        return None
    return profile.model_copy(update={"hotshot": _decode_hot_shot_config(row)})


def decode_driver_listing(row: Row, profile: DriverProfile) -> DriverListing | None:
    try:
        availability = DriverAvailability.model_validate(row)
    except pydantic.ValidationError as e:
        with log_listing_context(str(row.get("id", "-")), driver_id=profile.id):
            logger.warning(f"Skipping malformed availability: {e.error_count()} invalid field(s)")
        return None
    return DriverListing(availability=availability, driver=profile)


def decode_requests(rows: Iterable[Row], include_test_data: bool = False) -> list[DeliveryRequest]:
    decoded = (
        decode_request(row)
        for row in rows
        if _keep(row, OPEN_REQUEST_STATUS, include_test_data)
    )
    return [r for r in decoded if r is not None]


def decode_driver_listings(
    availability_rows: Iterable[Row],
    profile_rows: Iterable[Row],
    include_test_data: bool = False,
) -> list[DriverListing]:
    """Join active availabilities to their driver's profile."""
    profiles: dict[str, DriverProfile] = {}
    for row in profile_rows:
        profile = decode_profile(row)
        if profile is not None and profile.id is not None:
            profiles[profile.id] = profile

    listings: list[DriverListing] = []
    for row in availability_rows:
        if not _keep(row, ACTIVE_AVAILABILITY_STATUS, include_test_data):
            continue
        profile = profiles.get(row.get("driver_profile_id"))
        if profile is None:
            continue
        listing = decode_driver_listing(row, profile)
        if listing is not None:
            listings.append(listing)
    return listings


def fetch_listings(
    store: ListingStore,
    mode: ViewerMode,
    sandbox: bool = False,
) -> list[DeliveryRequest] | list[DriverListing]:
    """Load the feed for a viewer; drivers see requests, senders see drivers.

    Sandbox mode includes rows flagged as test data. A store outage yields an
    empty feed so the caller can show its empty state and retry later.
    """
    try:
        if mode == ViewerMode.DRIVER:
            return decode_requests(store.list(REQUEST_ENTITY), include_test_data=sandbox)
        return decode_driver_listings(
            store.list(AVAILABILITY_ENTITY),
            store.list(PROFILE_ENTITY),
            include_test_data=sandbox,
        )
    except StoreUnavailableError as e:
        logger.error(f"Listing store unavailable while loading {mode.value} feed: {e.message}")
        return []
