import math

from settings import PricingSettings

from .categories import Category, category_value


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (toward +inf).

    Python's round() uses banker's rounding; quoted prices must match the
    values users have always seen, so 13.5 -> 14 and 12.5 -> 13.
    """
    return math.floor(value + 0.5)


class PricingCalculator:
    """Suggested price for a delivery from straight-line distance and category.

    Rules, first match wins:

    * beer run: base fee + distance charge, then the after-hours surcharge;
      no floor price. The beer_run addon is not stacked on the base fee.
    * rideshare: distance charge + a fee per extra seat, floored.
    * anything else: distance charge + category addon, floored.

    Unknown categories get no addon. Distance is not validated, so a
    negative distance degrades to the floor price instead of failing.
    """

    def __init__(self, settings: PricingSettings | None = None):
        self.settings = settings or PricingSettings()

    def addon(self, category: Category | str | None) -> float:
        return self.settings.category_addons.get(category_value(category), 0)

    def calculate_price(
        self,
        distance_km: float,
        category: Category | str | None = Category.MISC,
        seats: int | None = None,
    ) -> float:
        s = self.settings
        key = category_value(category)
        distance_charge = distance_km * s.base_rate_per_km

        if key == Category.BEER_RUN.value:
            total = s.beer_run_base + distance_charge
            return float(round_half_up(total * s.beer_run_surcharge))

        if key == Category.RIDESHARE.value:
            seat_count = seats or 1
            seat_fee = (seat_count - 1) * s.rideshare_per_seat
            total = distance_charge + seat_fee
            return float(max(round_half_up(total), s.floor_price))

        total = distance_charge + self.addon(key)
        return float(max(round_half_up(total), s.floor_price))


_default_calculator = PricingCalculator()


def calculate_price(
    distance_km: float,
    category: Category | str | None = Category.MISC,
    seats: int | None = None,
) -> float:
    """Price with the default marketplace parameters."""
    return _default_calculator.calculate_price(distance_km, category, seats)
