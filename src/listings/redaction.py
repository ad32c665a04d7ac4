"""Guest-facing obfuscation of names, addresses and coordinates.

This is a presentation-safety transform for signed-out viewers, not an
access control: the store still returns full records.
"""

import random

from settings import SearchSettings

from .models import DeliveryRequest, DriverListing


def redact_name(full_name: str | None, is_guest: bool) -> str | None:
    """``John Smith`` -> ``John S.`` for guests; single names pass through."""
    if not is_guest or not full_name:
        return full_name

    parts = full_name.split()
    if not parts:
        return full_name
    if len(parts) == 1:
        return parts[0]
    return f"{parts[0]} {parts[-1][0].upper()}."


def redact_address(address: str | None, is_guest: bool) -> str | None:
    """Keep only the last two comma-separated components (city, region)."""
    if not is_guest or not address:
        return address

    parts = address.split(",")
    if len(parts) >= 2:
        return ",".join(parts[-2:]).strip()
    return address


def jitter_coordinates(
    lat: float | None,
    lng: float | None,
    is_guest: bool,
    rng: random.Random | None = None,
    settings: SearchSettings | None = None,
) -> tuple[float | None, float | None]:
    """Offset a point by a random amount of up to ~0.002 degrees per axis."""
    if not is_guest or lat is None or lng is None:
        return lat, lng

    rng = rng or random.Random()
    settings = settings or SearchSettings()
    spread = settings.jitter_max_deg - settings.jitter_min_deg
    amount = settings.jitter_min_deg + rng.random() * spread
    return (
        lat + (rng.random() - 0.5) * amount * 2,
        lng + (rng.random() - 0.5) * amount * 2,
    )


def redact_listing(
    listing: DeliveryRequest | DriverListing,
    rng: random.Random | None = None,
    settings: SearchSettings | None = None,
) -> DeliveryRequest | DriverListing:
    """Guest copy of a listing; the input is left untouched."""
    rng = rng or random.Random()

    if isinstance(listing, DeliveryRequest):
        pickup_lat, pickup_lng = jitter_coordinates(
            listing.pickup_latitude, listing.pickup_longitude, True, rng, settings
        )
        dropoff_lat, dropoff_lng = jitter_coordinates(
            listing.dropoff_latitude, listing.dropoff_longitude, True, rng, settings
        )
        return listing.model_copy(
            update={
                "poster_name": redact_name(listing.poster_name, True),
                "pickup_address": redact_address(listing.pickup_address, True),
                "dropoff_address": redact_address(listing.dropoff_address, True),
                "pickup_latitude": pickup_lat,
                "pickup_longitude": pickup_lng,
                "dropoff_latitude": dropoff_lat,
                "dropoff_longitude": dropoff_lng,
            }
        )

    a = listing.availability
    d = listing.driver

    # The driver's live position stands in for the route start when known
    start_lat, start_lng = a.from_latitude, a.from_longitude
    if d is not None and d.current_latitude is not None and d.current_longitude is not None:
        start_lat, start_lng = d.current_latitude, d.current_longitude
    start_lat, start_lng = jitter_coordinates(start_lat, start_lng, True, rng, settings)
    end_lat, end_lng = jitter_coordinates(a.to_latitude, a.to_longitude, True, rng, settings)

    availability = a.model_copy(
        update={
            "from_address": redact_address(a.from_address, True),
            "to_address": redact_address(a.to_address, True),
            "from_latitude": start_lat,
            "from_longitude": start_lng,
            "to_latitude": end_lat,
            "to_longitude": end_lng,
        }
    )
    driver = None
    if d is not None:
        driver = d.model_copy(
            update={
                "name": redact_name(d.name or d.full_name, True),
                "full_name": redact_name(d.full_name or d.name, True),
                "current_latitude": start_lat,
                "current_longitude": start_lng,
            }
        )
    return listing.model_copy(update={"availability": availability, "driver": driver})
