import pytest

from pricing import Category, PricingCalculator, calculate_price, round_half_up
from settings import PricingSettings


@pytest.mark.unit
class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected",
        [(13.5, 14), (12.5, 13), (0.5, 1), (13.49, 13), (13.51, 14), (-0.5, 0)],
    )
    def test_half_goes_up(self, value, expected) -> None:
        """Exact halves round away from zero on the positive side."""
        assert round_half_up(value) == expected

    def test_differs_from_bankers_rounding(self) -> None:
        """Builtin round would give 12 for 12.5."""
        assert round(12.5) == 12
        assert round_half_up(12.5) == 13


@pytest.mark.unit
class TestBeerRun:
    def test_zero_distance(self) -> None:
        """A zero-distance beer run is base plus surcharge, no addon."""
        assert calculate_price(0, "beer_run") == 30

    def test_surcharge_applied_to_distance(self) -> None:
        """The surcharge multiplies the distance charge too."""
        # (25 + 10 * 0.35) * 1.2 = 34.2
        assert calculate_price(10, Category.BEER_RUN) == 34

    def test_no_floor(self) -> None:
        """A negative distance can push a beer run under the floor price."""
        assert calculate_price(-60, "beer_run") == 5


@pytest.mark.unit
class TestRideshare:
    def test_extra_seats(self) -> None:
        """Each seat past the first adds the per-seat fee."""
        # round(3.5 + 2 * 5) = round(13.5) = 14
        assert calculate_price(10, "rideshare", seats=3) == 14

    def test_single_seat_floored(self) -> None:
        """A short single-seat ride is lifted to the floor."""
        assert calculate_price(10, "rideshare") == 10
        assert calculate_price(10, "rideshare", seats=1) == 10

    def test_zero_seats_counts_as_one(self) -> None:
        """Zero seats is priced as a single seat."""
        assert calculate_price(100, "rideshare", seats=0) == 35

    def test_long_trip(self) -> None:
        """Two seats over 100 km."""
        assert calculate_price(100, "rideshare", seats=2) == 40


@pytest.mark.unit
class TestStandardPricing:
    def test_default_category_is_misc(self) -> None:
        """No category prices as misc."""
        assert calculate_price(100) == 35

    @pytest.mark.parametrize(
        "category,expected",
        [
            ("groceries", 35),
            ("heavy_haul", 50),
            ("special_transport", 60),
            ("liquids", 40),
            ("auto_parts", 40),
            ("firewood", 45),
        ],
    )
    def test_category_addons(self, category, expected) -> None:
        """Each category adds its own flat addon."""
        assert calculate_price(100, category) == expected

    def test_unknown_category_has_no_addon(self) -> None:
        """Categories missing from the table add nothing."""
        assert calculate_price(100, "hardware_tools") == 35

    def test_none_category_is_misc(self) -> None:
        """None prices the same as misc."""
        assert calculate_price(100, None) == 35

    @pytest.mark.parametrize("distance", [0, 0.5, 5, 10, 28.5])
    @pytest.mark.parametrize("category", ["misc", "food", "groceries", "rideshare"])
    def test_floor_price(self, distance, category) -> None:
        """Standard pricing never drops below the floor."""
        assert calculate_price(distance, category) >= 10

    def test_negative_distance_degrades_to_floor(self) -> None:
        """A negative distance yields the floor, not an error."""
        assert calculate_price(-50, "misc") == 10

    def test_returns_float(self) -> None:
        """Prices come back as floats."""
        assert isinstance(calculate_price(100, "misc"), float)

    def test_enum_and_string_agree(self) -> None:
        """Category enums price the same as their string values."""
        assert calculate_price(42, Category.HEAVY_HAUL) == calculate_price(42, "heavy_haul")


@pytest.mark.unit
class TestPricingCalculatorSettings:
    def test_custom_rate_and_floor(self) -> None:
        """Rate and floor come from the injected settings."""
        calculator = PricingCalculator(PricingSettings(base_rate_per_km=1.0, floor_price=5))
        assert calculator.calculate_price(3, "misc") == 5
        assert calculator.calculate_price(20, "misc") == 20

    def test_custom_addons(self) -> None:
        """An injected addon table replaces the defaults."""
        calculator = PricingCalculator(PricingSettings(category_addons={"parcels": 7}))
        assert calculator.addon("parcels") == 7
        assert calculator.addon("firewood") == 0
        assert calculator.calculate_price(100, "parcels") == 42

    def test_custom_surcharge(self) -> None:
        """A 1.0 surcharge leaves the beer-run base as is."""
        calculator = PricingCalculator(PricingSettings(beer_run_surcharge=1.0))
        assert calculator.calculate_price(0, "beer_run") == 25
