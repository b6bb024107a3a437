"""
Risk Assessor - Flag structurally risky bids.

Rules are evaluated independently, so one bid can carry several flags:
- low_margin: margin below the recommended floor
- labor_heavy: labor dominates cost
- material_sensitive: material dominates cost
- below_minimum: a line item priced under its service minimum
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from bid_engines.bid_pricing.models import Bid
from bid_engines.pricing_catalog.models import ServiceDefinition
from bid_engines.risk.models import RiskFlag, RiskSeverity, RiskType

RECOMMENDED_MARGIN = 0.15
CRITICAL_MARGIN = 0.10
LABOR_HEAVY_RATIO = 0.70
MATERIAL_SENSITIVE_RATIO = 0.40


def assess_risks(bid: Bid, service_definitions: Iterable[ServiceDefinition]) -> List[RiskFlag]:
    """Recompute the risk flags for a bid with current totals."""
    flags: List[RiskFlag] = []
    if not bid.line_items or bid.subtotal == 0:
        return flags

    if bid.margin < RECOMMENDED_MARGIN:
        flags.append(
            RiskFlag(
                type=RiskType.LOW_MARGIN,
                message=f"Margin {bid.margin * 100:.0f}% is below recommended {RECOMMENDED_MARGIN * 100:.0f}%",
                severity=RiskSeverity.ERROR if bid.margin < CRITICAL_MARGIN else RiskSeverity.WARNING,
            )
        )

    labor_ratio = sum(item.labor_cost for item in bid.line_items) / bid.subtotal
    if labor_ratio > LABOR_HEAVY_RATIO:
        flags.append(
            RiskFlag(
                type=RiskType.LABOR_HEAVY,
                message=f"Labor is {labor_ratio * 100:.0f}% of costs - crew efficiency is critical",
                severity=RiskSeverity.WARNING,
            )
        )

    material_ratio = sum(item.material_cost for item in bid.line_items) / bid.subtotal
    if material_ratio > MATERIAL_SENSITIVE_RATIO:
        flags.append(
            RiskFlag(
                type=RiskType.MATERIAL_SENSITIVE,
                message=f"Material costs are {material_ratio * 100:.0f}% - watch for price changes",
                severity=RiskSeverity.WARNING,
            )
        )

    services: Dict[str, ServiceDefinition] = {s.id: s for s in service_definitions}
    for item in bid.line_items:
        service = services.get(item.service_type_id)
        if service is None or not service.minimum_charge:
            continue
        price = item.effective_price
        if price < service.minimum_charge:
            flags.append(
                RiskFlag(
                    type=RiskType.BELOW_MINIMUM,
                    message=f"{service.name}: ${price:,.0f} below minimum ${service.minimum_charge:,.0f}",
                    severity=RiskSeverity.ERROR,
                )
            )

    return flags
