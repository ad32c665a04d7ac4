"""Home feed derivation: radius match, filters, ordering and guest redaction.

Stages run in a fixed order and each stage's output size is recorded in
``FilterCounts`` so an empty feed can be explained (nothing nearby vs.
everything filtered out by category).
"""

import logging
import math
import random
from collections.abc import Iterable, Sequence
from enum import Enum

from pydantic import BaseModel, Field

from geo.coordinate import Coordinate
from geo.distance import haversine_distance_km, is_within_radius
from pricing.categories import Category, category_value
from settings import SearchSettings

from .models import DeliveryRequest, DriverListing, LatLng
from .redaction import redact_listing

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"


class ViewerMode(str, Enum):
    """Senders browse driver availability; drivers browse delivery requests."""

    SENDER = "sender"
    DRIVER = "driver"


class SearchCriteria(BaseModel):
    mode: ViewerMode = ViewerMode.SENDER
    center: Coordinate | None = None
    radius_km: float = 10
    category: Category | str = ALL_CATEGORIES
    hot_shot_only: bool = False
    authenticated: bool = False


class MatchedListing(BaseModel):
    listing: DeliveryRequest | DriverListing = Field(discriminator="kind")
    origin_distance_km: float | None = None
    dest_distance_km: float | None = None
    sort_distance_km: float = math.inf
    hot_shot_priority: bool = False


class FilterCounts(BaseModel):
    raw: int = 0
    after_radius: int = 0
    after_category: int = 0
    after_hot_shot: int = 0
    final: int = 0


class FilterResult(BaseModel):
    listings: list[MatchedListing] = Field(default_factory=list)
    counts: FilterCounts = Field(default_factory=FilterCounts)


def _distance_from(center: Coordinate, point: LatLng | None) -> float | None:
    if point is None:
        return None
    return haversine_distance_km(center.lat, center.lng, point[0], point[1])


def is_priority_hot_shot(listing: DeliveryRequest | DriverListing, mode: ViewerMode) -> bool:
    """Hot Shot driver posts are pinned above everything else for senders."""
    return mode == ViewerMode.SENDER and isinstance(listing, DriverListing) and listing.is_hot_shot


def match_radius(
    listings: Iterable[DeliveryRequest | DriverListing],
    center: Coordinate,
    radius_km: float,
    mode: ViewerMode,
) -> list[MatchedListing]:
    """Keep listings whose origin or destination lies within ``radius_km``.

    Priority Hot Shot posts bypass the radius entirely with distance 0.
    Listings without any usable coordinates are dropped.
    """
    matched: list[MatchedListing] = []
    for listing in listings:
        if is_priority_hot_shot(listing, mode):
            matched.append(
                MatchedListing(listing=listing, sort_distance_km=0.0, hot_shot_priority=True)
            )
            continue

        origin_km = _distance_from(center, listing.origin)
        dest_km = _distance_from(center, listing.destination)
        if not (is_within_radius(origin_km, radius_km) or is_within_radius(dest_km, radius_km)):
            continue

        matched.append(
            MatchedListing(
                listing=listing,
                origin_distance_km=origin_km,
                dest_distance_km=dest_km,
                sort_distance_km=min(
                    origin_km if origin_km is not None else math.inf,
                    dest_km if dest_km is not None else math.inf,
                ),
            )
        )
    return matched


def listing_matches_category(listing: DeliveryRequest | DriverListing, category: str) -> bool:
    if isinstance(listing, DeliveryRequest):
        return listing.item_type == category
    return category in listing.categories


def filter_by_category(
    matched: Sequence[MatchedListing], category: Category | str | None
) -> list[MatchedListing]:
    if category is None or category == ALL_CATEGORIES:
        return list(matched)
    key = category_value(category)
    return [m for m in matched if listing_matches_category(m.listing, key)]


def listing_is_hot_shot(listing: DeliveryRequest | DriverListing) -> bool:
    if isinstance(listing, DeliveryRequest):
        return listing.is_urgent
    return listing.offers_hot_shot


def filter_hot_shot(matched: Sequence[MatchedListing], enabled: bool) -> list[MatchedListing]:
    if not enabled:
        return list(matched)
    return [m for m in matched if listing_is_hot_shot(m.listing)]


def sort_matches(matched: Sequence[MatchedListing]) -> list[MatchedListing]:
    """Pinned Hot Shots first, then nearest first; unknown distance sorts last."""
    return sorted(matched, key=lambda m: (not m.hot_shot_priority, m.sort_distance_km))


def redact_matches(
    matched: Sequence[MatchedListing],
    authenticated: bool,
    rng: random.Random | None = None,
    settings: SearchSettings | None = None,
) -> list[MatchedListing]:
    if authenticated:
        return list(matched)
    rng = rng or random.Random()
    return [
        m.model_copy(update={"listing": redact_listing(m.listing, rng, settings)})
        for m in matched
    ]


class ListingFilterPipeline:
    """Runs the five feed stages over already-fetched listings."""

    def __init__(self, settings: SearchSettings | None = None):
        self.settings = settings or SearchSettings()

    @property
    def default_center(self) -> Coordinate:
        return Coordinate(
            lat=self.settings.default_center_lat,
            lng=self.settings.default_center_lng,
        )

    def run(
        self,
        listings: Sequence[DeliveryRequest | DriverListing],
        criteria: SearchCriteria,
        rng: random.Random | None = None,
    ) -> FilterResult:
        counts = FilterCounts(raw=len(listings))
        if not listings:
            return FilterResult(counts=counts)

        center = criteria.center or self.default_center

        after_radius = match_radius(listings, center, criteria.radius_km, criteria.mode)
        counts.after_radius = len(after_radius)

        after_category = filter_by_category(after_radius, criteria.category)
        counts.after_category = len(after_category)

        after_hot_shot = filter_hot_shot(after_category, criteria.hot_shot_only)
        counts.after_hot_shot = len(after_hot_shot)
        counts.final = len(after_hot_shot)

        ordered = sort_matches(after_hot_shot)
        visible = redact_matches(ordered, criteria.authenticated, rng, self.settings)

        logger.debug(
            f"Feed for {criteria.mode.value} within {criteria.radius_km}km: "
            f"raw={counts.raw} radius={counts.after_radius} "
            f"category={counts.after_category} hot_shot={counts.after_hot_shot}"
        )
        return FilterResult(listings=visible, counts=counts)


def filter_listings(
    listings: Sequence[DeliveryRequest | DriverListing],
    criteria: SearchCriteria,
    rng: random.Random | None = None,
) -> FilterResult:
    return ListingFilterPipeline().run(listings, criteria, rng)
