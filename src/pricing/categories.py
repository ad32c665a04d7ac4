"""Delivery categories shared by requests, driver capacities and pricing."""

from enum import Enum


class Category(str, Enum):
    """What is being moved. Values are the strings stored on records."""

    GROCERIES = "groceries"
    PARCELS = "parcels"
    FOOD = "food"
    AUTO_PARTS = "auto_parts"
    HEAVY_HAUL = "heavy_haul"
    SPECIAL_TRANSPORT = "special_transport"
    LIQUIDS = "liquids"
    PASSENGERS = "passengers"
    RETAIL = "retail"
    FIREWOOD = "firewood"
    MISC = "misc"
    BEER_RUN = "beer_run"
    RIDESHARE = "rideshare"


def category_value(category: "Category | str | None") -> str:
    """Normalize an enum member or raw string to the stored string value."""
    if category is None:
        return Category.MISC.value
    if isinstance(category, Category):
        return category.value
    return str(category)
