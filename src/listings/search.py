"""Per-session search state for the home feed.

One ``SearchState`` is created when a viewer opens the feed and discarded
when they leave; nothing here is module-global.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from geo.coordinate import Coordinate
from geo.distance import haversine_distance_m
from pricing.categories import Category
from settings import SearchSettings

from .pipeline import ALL_CATEGORIES, SearchCriteria, ViewerMode


class LocationFix(BaseModel):
    lat: float
    lng: float
    accuracy_m: float | None = None
    timestamp: datetime | None = None
    address: str | None = None


def next_radius(current_km: float, steps: list[float]) -> float:
    """Next step in the cycle, wrapping; an off-list radius restarts at the first step."""
    try:
        index = steps.index(current_km)
    except ValueError:
        index = -1
    return steps[(index + 1) % len(steps)]


def is_cached_fix_fresh(fix: LocationFix, now: datetime, ttl_seconds: int) -> bool:
    if fix.timestamp is None:
        return False
    return (now - fix.timestamp).total_seconds() <= ttl_seconds


class SearchState(BaseModel):
    settings: SearchSettings = Field(default_factory=SearchSettings, exclude=True)

    mode: ViewerMode = ViewerMode.SENDER
    sandbox: bool = False
    authenticated: bool = False
    center: Coordinate | None = None
    radius_km: float | None = None
    category: Category | str = ALL_CATEGORIES
    hot_shot_only: bool = False
    search_text: str = ""
    best_fix: LocationFix | None = None

    def model_post_init(self, __context: object) -> None:
        if self.radius_km is None:
            self.radius_km = self.settings.default_radius_km

    def cycle_radius(self) -> float:
        self.radius_km = next_radius(self.radius_km, self.settings.radius_steps)
        return self.radius_km

    def set_center(self, lat: float | None, lng: float | None, address: str | None = None) -> bool:
        """Search around a picked place; resets the radius. Ignores incomplete points."""
        if lat is None or lng is None:
            return False
        self.center = Coordinate(lat=lat, lng=lng, name=address or "Search location")
        self.search_text = address or ""
        self.radius_km = self.settings.default_radius_km
        return True

    def accept_location_fix(self, fix: LocationFix) -> bool:
        """Take a GPS fix as the search center.

        The first fix is always taken. Later fixes only replace it when they
        are accurate enough and moved far enough to matter, so jitter in a
        high-accuracy watch does not reshuffle the feed.
        """
        if self.best_fix is not None:
            if fix.accuracy_m is None or fix.accuracy_m >= self.settings.refine_accuracy_threshold_m:
                return False
            moved_m = haversine_distance_m(self.best_fix.lat, self.best_fix.lng, fix.lat, fix.lng)
            if moved_m <= self.settings.refine_distance_threshold_m:
                return False

        self.best_fix = fix
        return self.set_center(fix.lat, fix.lng, fix.address)

    def restore_cached_fix(self, fix: LocationFix, now: datetime) -> bool:
        """Show a recent saved position while a live fix is pending.

        The cached point never becomes ``best_fix``; the first live fix
        still replaces it unconditionally.
        """
        if not is_cached_fix_fresh(fix, now, self.settings.location_cache_ttl_seconds):
            return False
        return self.set_center(fix.lat, fix.lng, fix.address)

    def clear_filters(self) -> None:
        self.search_text = ""
        self.center = None
        self.category = ALL_CATEGORIES
        self.radius_km = self.settings.default_radius_km
        self.hot_shot_only = False

    def switch_mode(self, mode: ViewerMode | None = None) -> ViewerMode:
        """Toggle (or set) sender/driver view; location filters start over."""
        if mode is None:
            mode = ViewerMode.DRIVER if self.mode == ViewerMode.SENDER else ViewerMode.SENDER
        self.mode = mode
        self.radius_km = self.settings.default_radius_km
        self.center = None
        self.search_text = ""
        return self.mode

    def set_sandbox(self, enabled: bool) -> None:
        self.sandbox = enabled
        self.radius_km = self.settings.default_radius_km
        self.center = None
        self.search_text = ""

    @property
    def has_active_filters(self) -> bool:
        return bool(
            self.center is not None
            or self.category != ALL_CATEGORIES
            or self.radius_km != self.settings.default_radius_km
            or self.hot_shot_only
            or self.search_text.strip()
        )

    def criteria(self) -> SearchCriteria:
        return SearchCriteria(
            mode=self.mode,
            center=self.center,
            radius_km=self.radius_km,
            category=self.category,
            hot_shot_only=self.hot_shot_only,
            authenticated=self.authenticated,
        )
