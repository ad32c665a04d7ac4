from .calculator import ETACalculator, ETAInfo, compute_eta

__all__ = ["ETACalculator", "ETAInfo", "compute_eta"]
