"""
Trade Consumption Mapper - Apply a trade's consumption rules to classified objects.

Each rule selects objects by type (and optionally sub-type), reads one
measurement, scales it by the rule's waste factor, and adds it to the
service the rule feeds.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from bid_engines.config.runtime_config import get_quantity_epsilon
from bid_engines.pricing_catalog.models import ConsumptionRule, TradeDefinition
from bid_engines.site_objects.models import GeometricObject
from bid_engines.trade_estimates.models import ServiceQuantity

logger = logging.getLogger(__name__)


def rule_matches(rule: ConsumptionRule, obj: GeometricObject) -> bool:
    if obj.object_type != rule.object_type:
        return False
    if rule.sub_types:
        return obj.sub_type is not None and obj.sub_type in rule.sub_types
    return True


def contribution(rule: ConsumptionRule, obj: GeometricObject) -> float:
    """Quantity one object adds to the rule's service."""
    quantity = obj.measurements.read(rule.quantity_source.value)
    if rule.waste_factor is not None:
        quantity *= rule.waste_factor
    return quantity


def map_consumption(
    objects: Iterable[GeometricObject],
    trade: TradeDefinition,
    epsilon: Optional[float] = None,
) -> Dict[str, ServiceQuantity]:
    """
    Aggregate per-service quantities for one trade.

    Args:
        objects: Classified objects with current measurements
        trade: Trade whose consumption rules are applied
        epsilon: Aggregates with |quantity| <= epsilon are dropped
            (defaults to the runtime-configured value)

    Returns:
        service_id -> ServiceQuantity, in first-contribution order
    """
    threshold = get_quantity_epsilon() if epsilon is None else epsilon
    objects = list(objects)
    aggregates: Dict[str, ServiceQuantity] = {}

    for rule in trade.consumes:
        for obj in objects:
            if not rule_matches(rule, obj):
                continue
            agg = aggregates.setdefault(rule.service_id, ServiceQuantity(service_id=rule.service_id))
            agg.quantity += contribution(rule, obj)
            if obj.id not in agg.source_object_ids:
                agg.source_object_ids.append(obj.id)

    result: Dict[str, ServiceQuantity] = {}
    for service_id, agg in aggregates.items():
        if abs(agg.quantity) <= threshold:
            logger.debug("Dropping service %s for trade %s: quantity %r", service_id, trade.id, agg.quantity)
            continue
        result[service_id] = agg
    return result
