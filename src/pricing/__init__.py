from .calculator import PricingCalculator, calculate_price, round_half_up
from .categories import Category

__all__ = ["Category", "PricingCalculator", "calculate_price", "round_half_up"]
