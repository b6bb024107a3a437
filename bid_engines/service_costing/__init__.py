"""Service Costing module - per-service cost breakdowns."""

from bid_engines.service_costing.calculator import calculate, round_half_up, unit_for_model
from bid_engines.service_costing.models import CostBreakdown

__all__ = [
    "CostBreakdown",
    "calculate",
    "round_half_up",
    "unit_for_model",
]
