"""Suggested prices for listing cards and the post form's quick picks."""

from pydantic import BaseModel

from geo.distance import haversine_distance_km
from listings.models import DeliveryRequest, DriverListing

from .calculator import PricingCalculator, round_half_up
from .categories import Category

# Used when a listing has no usable route distance
DEFAULT_QUOTE_DISTANCE_KM = 20.0

FALLBACK_PICKS = (15, 25, 40)


class PricePick(BaseModel):
    label: str
    value: float
    highlight: bool = False


def _route_distance_km(request: DeliveryRequest) -> float | None:
    if request.origin is None or request.destination is None:
        return None
    return haversine_distance_km(*request.origin, *request.destination)


def suggest_price(
    listing: DeliveryRequest | DriverListing,
    distance_km: float | None = None,
    calculator: PricingCalculator | None = None,
) -> float:
    """Price shown on a card.

    Requests are quoted on their pickup-to-dropoff distance. Driver posts
    are quoted on the given feed distance for their first listed category.
    """
    calculator = calculator or PricingCalculator()

    if isinstance(listing, DeliveryRequest):
        route_km = _route_distance_km(listing) if distance_km is None else distance_km
        return calculator.calculate_price(
            route_km if route_km is not None else DEFAULT_QUOTE_DISTANCE_KM,
            listing.item_type or Category.MISC,
            seats=listing.seats_required,
        )

    categories = listing.categories
    return calculator.calculate_price(
        distance_km if distance_km is not None else DEFAULT_QUOTE_DISTANCE_KM,
        categories[0] if categories else Category.MISC,
    )


def _round_to_5(value: float) -> int:
    return round_half_up(value / 5) * 5


def suggest_price_picks(suggested: float | None) -> list[PricePick]:
    """The suggestion plus rounded -20%/+20% alternatives."""
    if not suggested:
        return [PricePick(label=f"${v}", value=v) for v in FALLBACK_PICKS]

    shown = int(suggested) if float(suggested).is_integer() else suggested
    picks = [PricePick(label=f"Suggested: ${shown}", value=suggested, highlight=True)]

    lower = max(5, _round_to_5(suggested * 0.8))
    higher = _round_to_5(suggested * 1.2)
    for value in (lower, higher):
        if value != suggested:
            picks.append(PricePick(label=f"${value}", value=value))
    return picks
