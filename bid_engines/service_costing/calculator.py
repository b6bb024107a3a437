"""
Service Cost Calculator - Pure labor/material/equipment arithmetic.

Implements:
- Labor hours by pricing model (production-rate, hourly, fixed)
- Burdened labor, wasted material, fixed + hourly equipment
- Display units per pricing model

Minimum charges are not applied here; callers decide whether a minimum gates a
single service or a whole package.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from bid_engines.pricing_catalog.models import PricingModel, ServiceDefinition
from bid_engines.service_costing.models import CostBreakdown

UNIT_BY_MODEL: Dict[PricingModel, str] = {
    PricingModel.AREA: "sq ft",
    PricingModel.LINEAR: "linear ft",
    PricingModel.HOURLY: "hr",
    PricingModel.FIXED: "ea",
    PricingModel.UNIT: "ea",
}

# Nominal crew-hours booked against a fixed-price job
FIXED_JOB_HOURS = 1.0


def unit_for_model(pricing_model: PricingModel) -> str:
    return UNIT_BY_MODEL[pricing_model]


def labor_hours_for(service: ServiceDefinition, quantity: float) -> float:
    if service.pricing_model == PricingModel.HOURLY:
        return quantity
    if service.pricing_model == PricingModel.FIXED:
        return FIXED_JOB_HOURS
    if not service.production_rate:
        return 0.0
    return quantity / service.production_rate


def calculate(
    service: ServiceDefinition,
    quantity: float,
    labor_burden_rate: Optional[float] = None,
) -> CostBreakdown:
    """
    Price a quantity of a service.

    Args:
        service: Service cost-rule parameters
        quantity: Units of work; must be >= 0 (not clamped here)
        labor_burden_rate: Overrides the service's own burden when given
            (rate tables carry one burden for every service)

    Returns:
        CostBreakdown with the unenforced subtotal
    """
    burden = service.labor_burden_rate if labor_burden_rate is None else labor_burden_rate

    labor_hours = labor_hours_for(service, quantity)
    labor_cost = labor_hours * service.crew_size * service.hourly_rate * burden

    material_cost = 0.0
    if service.material_cost_per_unit and service.pricing_model != PricingModel.FIXED:
        waste = service.material_waste_factor or 1.0
        material_cost = quantity * service.material_cost_per_unit * waste

    equipment_cost = (service.equipment_cost_fixed or 0.0) + (service.equipment_cost_hourly or 0.0) * labor_hours

    return CostBreakdown(
        quantity=quantity,
        unit=unit_for_model(service.pricing_model),
        labor_hours=labor_hours,
        labor_cost=labor_cost,
        material_cost=material_cost,
        equipment_cost=equipment_cost,
        subtotal=labor_cost + material_cost + equipment_cost,
    )


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like a spreadsheet (0.5 goes up) rather than to even."""
    exponent = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP))
