"""Listing records as decoded from the hosted store.

A listing is either a sender's delivery request or a driver's posted
availability joined with the driver's profile. The ``kind`` field is the
discriminant; downstream code branches on it once instead of probing for
field presence.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from hotshot.models import HotShotConfig, HotShotPostConfig

HOT_SHOT_URGENCIES = frozenset({"ASAP", "Hot Shot"})

LatLng = tuple[float, float]


def _pair(lat: float | None, lng: float | None) -> LatLng | None:
    if lat is None or lng is None:
        return None
    return (lat, lng)


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore")


class DeliveryRequest(_Record):
    kind: Literal["request"] = "request"

    id: str | None = None
    status: str | None = None
    poster_name: str | None = None
    sender_profile_id: str | None = None

    pickup_address: str = ""
    pickup_latitude: float | None = None
    pickup_longitude: float | None = None
    dropoff_address: str = ""
    dropoff_latitude: float | None = None
    dropoff_longitude: float | None = None

    item_type: str | None = None
    offered_price: float | None = None
    seats_required: int | None = None
    urgency: str | None = None
    is_hot_shot: bool = False

    deliver_by: datetime | None = None
    ready_by: datetime | None = None
    ready_at: datetime | None = None
    needed_by: datetime | None = None

    is_test_data: bool = False

    @property
    def origin(self) -> LatLng | None:
        return _pair(self.pickup_latitude, self.pickup_longitude)

    @property
    def destination(self) -> LatLng | None:
        return _pair(self.dropoff_latitude, self.dropoff_longitude)

    @property
    def is_urgent(self) -> bool:
        return self.urgency in HOT_SHOT_URGENCIES or self.is_hot_shot


class DriverAvailability(_Record):
    id: str | None = None
    driver_profile_id: str | None = None
    status: str | None = None

    from_address: str = ""
    from_latitude: float | None = None
    from_longitude: float | None = None
    to_address: str = ""
    to_latitude: float | None = None
    to_longitude: float | None = None

    depart_at: datetime | None = None
    window_start: datetime | None = None
    return_depart_at: datetime | None = None
    recurring_pattern: str | None = None

    capacities: list[str] | None = None
    vehicle_type: str | None = None
    min_fee: float | None = None
    notes: str | None = None
    hot_shot: bool = False
    hot_shot_config: HotShotPostConfig | None = None

    is_test_data: bool = False


class DriverProfile(_Record):
    id: str | None = None
    name: str | None = None
    full_name: str | None = None
    email: str | None = None
    vehicle_type: str = "car"
    categories_served: list[str] = Field(default_factory=list)
    base_fee: float = 15
    avatar_url: str | None = None
    current_latitude: float | None = None
    current_longitude: float | None = None
    hot_shot_capable: bool = False
    hotshot: HotShotConfig | None = None

    @property
    def display_name(self) -> str | None:
        return self.full_name or self.name


class DriverListing(_Record):
    kind: Literal["driver"] = "driver"

    availability: DriverAvailability
    driver: DriverProfile | None = None

    @property
    def id(self) -> str | None:
        return self.availability.id

    @property
    def origin(self) -> LatLng | None:
        """Route start, else the driver's current position."""
        a = self.availability
        pair = _pair(a.from_latitude, a.from_longitude)
        if pair is None and self.driver is not None:
            pair = _pair(self.driver.current_latitude, self.driver.current_longitude)
        return pair

    @property
    def destination(self) -> LatLng | None:
        return _pair(self.availability.to_latitude, self.availability.to_longitude)

    @property
    def categories(self) -> list[str]:
        if self.availability.capacities is not None:
            return self.availability.capacities
        if self.driver is not None:
            return self.driver.categories_served
        return []

    @property
    def is_hot_shot(self) -> bool:
        """Posted as a Hot Shot offer (always visible to senders)."""
        return self.availability.hot_shot

    @property
    def offers_hot_shot(self) -> bool:
        return self.availability.hot_shot or (
            self.driver is not None and self.driver.hot_shot_capable
        )


Listing = Annotated[DeliveryRequest | DriverListing, Field(discriminator="kind")]
