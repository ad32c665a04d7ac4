import pytest

from pricing.suggestions import (
    DEFAULT_QUOTE_DISTANCE_KM,
    FALLBACK_PICKS,
    suggest_price,
    suggest_price_picks,
)
from tests.factories import CENTER_LAT, CENTER_LNG, lat_offset_km


@pytest.mark.unit
class TestSuggestPrice:
    def test_request_quoted_on_route_distance(self, factory) -> None:
        """Requests are quoted on the pickup-to-dropoff distance."""
        request = factory.request(
            km_north=0,
            item_type="heavy_haul",
            dropoff_latitude=CENTER_LAT + lat_offset_km(100),
            dropoff_longitude=CENTER_LNG,
        )
        # 100km * 0.35 + 15 addon
        assert suggest_price(request) == 50

    def test_request_without_dropoff_uses_default_distance(self, factory) -> None:
        """Requests with no dropoff fall back to 20 km."""
        request = factory.request(item_type="special_transport")
        assert DEFAULT_QUOTE_DISTANCE_KM == 20
        # 20 * 0.35 + 25 = 32
        assert suggest_price(request) == 32

    def test_request_rideshare_uses_seats(self, factory) -> None:
        """Rideshare requests price their seats."""
        request = factory.request(item_type="rideshare", seats_required=3)
        assert suggest_price(request, distance_km=10) == 14

    def test_request_without_item_type_is_misc(self, factory) -> None:
        """A request with no item type prices as misc."""
        request = factory.request(item_type=None)
        assert suggest_price(request, distance_km=100) == 35

    def test_driver_quoted_on_first_category(self, factory) -> None:
        """Drivers are quoted on the first category they carry."""
        listing = factory.driver(capacities=["firewood", "parcels"])
        assert suggest_price(listing, distance_km=100) == 45

    def test_driver_without_categories_is_misc(self, factory) -> None:
        """A driver with no categories prices as misc."""
        listing = factory.driver(capacities=[])
        assert suggest_price(listing, distance_km=100) == 35

    def test_pinned_hot_shot_driver_quoted_at_feed_distance(self, factory) -> None:
        """Pinned Hot Shot drivers sit at distance 0, so only the addon or floor applies."""
        listing = factory.driver(hot_shot=True, capacities=["heavy_haul"])
        assert suggest_price(listing, distance_km=0) == 15
        assert suggest_price(listing) == 22


@pytest.mark.unit
class TestSuggestPricePicks:
    def test_suggestion_with_alternatives(self) -> None:
        """The suggestion comes first, flanked by -20% and +20%."""
        picks = suggest_price_picks(30)
        assert [p.label for p in picks] == ["Suggested: $30", "$25", "$35"]
        assert [p.value for p in picks] == [30, 25, 35]
        assert picks[0].highlight
        assert not picks[1].highlight

    def test_lower_pick_never_below_five(self) -> None:
        """The lower pick is clamped to $5 and dropped when it equals the suggestion."""
        picks = suggest_price_picks(5)
        assert [p.value for p in picks] == [5]

    def test_alternatives_equal_to_suggestion_are_dropped(self) -> None:
        """Alternatives that round to the suggestion are not repeated."""
        picks = suggest_price_picks(10)
        # 0.8 * 10 -> 10, 1.2 * 10 -> 10
        assert [p.value for p in picks] == [10]

    @pytest.mark.parametrize("suggested", [None, 0])
    def test_fallback_without_suggestion(self, suggested) -> None:
        """No suggestion gives the fixed fallback picks."""
        picks = suggest_price_picks(suggested)
        assert [p.value for p in picks] == list(FALLBACK_PICKS)
        assert [p.label for p in picks] == ["$15", "$25", "$40"]
        assert not any(p.highlight for p in picks)
