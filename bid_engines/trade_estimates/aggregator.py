"""
Trade Aggregator - Price service quantities and roll them into a trade estimate.

Implements:
- Service resolution by id or code (unresolved entries are skipped)
- Per-service minimum-charge enforcement
- Mobilization, margin and total for the trade
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from bid_engines.pricing_catalog.models import ServiceDefinition, TradeDefinition
from bid_engines.service_costing.calculator import calculate, round_half_up
from bid_engines.trade_estimates.models import ComputedLineItem, ComputedTradeEstimate, ServiceQuantity

logger = logging.getLogger(__name__)


def index_services(services: Iterable[ServiceDefinition]) -> Dict[str, ServiceDefinition]:
    """Lookup table keyed by both id and code; ids win on collision."""
    by_key: Dict[str, ServiceDefinition] = {}
    services = list(services)
    for service in services:
        if service.code:
            by_key[service.code] = service
    for service in services:
        by_key[service.id] = service
    return by_key


def price_line_item(service: ServiceDefinition, quantity: ServiceQuantity) -> ComputedLineItem:
    """Cost one aggregated quantity and enforce the service minimum."""
    breakdown = calculate(service, quantity.quantity)
    subtotal = max(breakdown.subtotal, service.minimum_charge)

    return ComputedLineItem(
        service_id=service.id,
        service_name=service.name,
        quantity=round_half_up(quantity.quantity),
        unit=service.unit,
        labor_hours=round_half_up(breakdown.labor_hours, 1),
        labor_cost=round_half_up(breakdown.labor_cost),
        material_cost=round_half_up(breakdown.material_cost),
        equipment_cost=round_half_up(breakdown.equipment_cost),
        subtotal=round_half_up(subtotal),
        minimum_applied=breakdown.subtotal < service.minimum_charge,
        source_object_ids=list(quantity.source_object_ids),
    )


def aggregate_trade(
    trade: TradeDefinition,
    service_quantities: Mapping[str, ServiceQuantity],
    services: Iterable[ServiceDefinition],
) -> Optional[ComputedTradeEstimate]:
    """
    Build a trade estimate from aggregated service quantities.

    Returns:
        ComputedTradeEstimate, or None when no line item could be produced
        (the caller omits the trade entirely)
    """
    lookup = index_services(services)
    resolved: Dict[str, ServiceDefinition] = {}
    merged: Dict[str, ServiceQuantity] = {}

    for service_key, quantity in service_quantities.items():
        if not quantity.quantity:
            continue
        service = lookup.get(service_key)
        if service is None:
            logger.debug("Trade %s references unknown service %s; skipping", trade.id, service_key)
            continue
        # Rules may name one service by id and by code
        agg = merged.get(service.id)
        if agg is None:
            resolved[service.id] = service
            merged[service.id] = ServiceQuantity(
                service_id=service.id,
                quantity=quantity.quantity,
                source_object_ids=list(quantity.source_object_ids),
            )
            continue
        agg.quantity += quantity.quantity
        for obj_id in quantity.source_object_ids:
            if obj_id not in agg.source_object_ids:
                agg.source_object_ids.append(obj_id)

    line_items: List[ComputedLineItem] = [
        price_line_item(resolved[service_id], quantity)
        for service_id, quantity in merged.items()
        if quantity.quantity
    ]

    if not line_items:
        return None

    subtotal = sum(item.subtotal for item in line_items)
    mobilization = trade.mobilization_cost if subtotal > 0 else 0.0
    margin_amount = round_half_up(subtotal * trade.default_margin)

    return ComputedTradeEstimate(
        trade_id=trade.id,
        trade_name=trade.name,
        trade_code=trade.code,
        line_items=line_items,
        subtotal=subtotal,
        mobilization=mobilization,
        margin=trade.default_margin,
        margin_amount=margin_amount,
        total=subtotal + mobilization + margin_amount,
    )
