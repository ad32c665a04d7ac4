from datetime import datetime, timedelta

from pydantic import BaseModel, Field

from geo.distance import haversine_distance_km
from listings.models import DeliveryRequest, DriverListing
from pricing.calculator import round_half_up
from settings import ETASettings


class ETAInfo(BaseModel):
    """Normalized trip timing for a listing card."""

    origin_name: str
    dest_name: str
    depart_at: datetime
    eta_at: datetime | None
    return_depart_at: datetime | None = None
    buffer_tag: str
    distance_km: float = Field(ge=0)


def _place_name(address: str | None, default: str) -> str:
    head = (address or "").split(",")[0].strip()
    return head or default


class ETACalculator:
    """Straight-line arrival estimate at a constant average speed.

    No routing service is consulted, so every result carries the estimate
    buffer tag. Missing departure time or any missing coordinate yields
    None, which callers render as "ETA unknown".
    """

    def __init__(self, settings: ETASettings | None = None):
        self.settings = settings or ETASettings()

    def compute(self, listing: DeliveryRequest | DriverListing) -> ETAInfo | None:
        if isinstance(listing, DriverListing):
            a = listing.availability
            depart_at = a.depart_at or a.window_start
            coords = (a.from_latitude, a.from_longitude, a.to_latitude, a.to_longitude)
            from_address, to_address = a.from_address, a.to_address
            return_depart_at = a.return_depart_at
        else:
            depart_at = listing.deliver_by or listing.ready_by or listing.ready_at
            coords = (
                listing.pickup_latitude,
                listing.pickup_longitude,
                listing.dropoff_latitude,
                listing.dropoff_longitude,
            )
            from_address, to_address = listing.pickup_address, listing.dropoff_address
            return_depart_at = None

        if depart_at is None:
            return None
        if any(c is None for c in coords):
            return None

        from_lat, from_lng, to_lat, to_lng = coords
        distance_km = haversine_distance_km(from_lat, from_lng, to_lat, to_lng)
        duration_seconds = distance_km / self.settings.average_speed_kmh * 3600

        return ETAInfo(
            origin_name=_place_name(from_address, "Origin"),
            dest_name=_place_name(to_address, "Destination"),
            depart_at=depart_at,
            eta_at=depart_at + timedelta(seconds=duration_seconds),
            return_depart_at=return_depart_at,
            buffer_tag=self.settings.buffer_tag,
            distance_km=float(round_half_up(distance_km)),
        )


_default_calculator = ETACalculator()


def compute_eta(listing: DeliveryRequest | DriverListing) -> ETAInfo | None:
    return _default_calculator.compute(listing)
