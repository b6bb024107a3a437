"""
Bid Line Item Engine - Manual, flat pricing surface over one bid.

Implements:
- Bid creation from a measurement snapshot
- Add / remove / update of line items with quantity and price overrides
- Margin changes (clamped to 0..1)
- recalculate_totals as the single source of bid totals

Every operation returns a new Bid with totals and risk flags rebuilt from
scratch; the previous Bid is stale as soon as a call returns.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from bid_engines.bid_pricing.models import (
    Bid,
    BidContext,
    BidLineItem,
    CostBreakdownSummary,
    LineItemUpdate,
    MeasurementSnapshot,
)
from bid_engines.pricing_catalog.models import PricingConfig, ServiceDefinition
from bid_engines.risk.assessor import assess_risks
from bid_engines.service_costing.calculator import calculate

logger = logging.getLogger(__name__)

_RECALC_FIELDS = {"quantity", "override_quantity"}


class LineItemNotFoundError(KeyError):
    """No line item with the given id exists on the bid."""


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def clamp_margin(margin: float) -> float:
    return max(0.0, min(1.0, margin))


def recalculate_totals(bid: Bid) -> Bid:
    """Rebuild subtotal, margin amount and total from the line items."""
    subtotal = sum(item.effective_price for item in bid.line_items)
    margin_amount = subtotal * bid.margin
    return bid.model_copy(
        update={
            "subtotal": subtotal,
            "margin_amount": margin_amount,
            "total": subtotal + margin_amount,
            "updated_at": datetime.now(timezone.utc),
        }
    )


def cost_breakdown(bid: Bid) -> CostBreakdownSummary:
    """Labor/material/equipment sums and their share of direct cost."""
    labor = sum(item.labor_cost for item in bid.line_items)
    material = sum(item.material_cost for item in bid.line_items)
    equipment = sum(item.equipment_cost for item in bid.line_items)
    total = labor + material + equipment

    def pct(value: float) -> float:
        return value / total * 100 if total > 0 else 0.0

    return CostBreakdownSummary(
        labor=labor,
        material=material,
        equipment=equipment,
        labor_percent=pct(labor),
        material_percent=pct(material),
        equipment_percent=pct(equipment),
    )


class BidPricingEngine:
    """Bid operations bound to one pricing configuration."""

    def __init__(self, config: PricingConfig):
        self.config = config

    def build_line_item(
        self,
        service: ServiceDefinition,
        quantity: float,
        description: Optional[str] = None,
        line_item_id: Optional[str] = None,
    ) -> BidLineItem:
        breakdown = calculate(service, quantity, labor_burden_rate=self.config.labor_burden_rate)
        return BidLineItem(
            id=line_item_id or _new_id("li"),
            service_type_id=service.id,
            service_name=service.name,
            description=description or service.name,
            quantity=quantity,
            unit=breakdown.unit,
            labor_hours=breakdown.labor_hours,
            labor_cost=breakdown.labor_cost,
            material_cost=breakdown.material_cost,
            equipment_cost=breakdown.equipment_cost,
            subtotal=breakdown.subtotal,
        )

    def refresh(self, bid: Bid) -> Bid:
        """Totals first, then risk flags computed over those totals."""
        with_totals = recalculate_totals(bid)
        return with_totals.model_copy(
            update={"risk_flags": assess_risks(with_totals, self.config.service_types)}
        )

    def create_bid(
        self,
        snapshot: MeasurementSnapshot,
        context: Optional[BidContext] = None,
    ) -> Bid:
        return Bid(
            id=_new_id("bid"),
            context=context or BidContext(),
            measurements=snapshot,
            pricing_config_id=self.config.id,
            margin=self.config.default_margin,
        )

    def add_line_item(
        self,
        bid: Bid,
        service: ServiceDefinition,
        quantity: float,
        description: Optional[str] = None,
    ) -> Bid:
        item = self.build_line_item(service, quantity, description)
        return self.refresh(bid.model_copy(update={"line_items": [*bid.line_items, item]}))

    def remove_line_item(self, bid: Bid, line_item_id: str) -> Bid:
        remaining = [item for item in bid.line_items if item.id != line_item_id]
        return self.refresh(bid.model_copy(update={"line_items": remaining}))

    def update_line_item(self, bid: Bid, line_item_id: str, updates: LineItemUpdate) -> Bid:
        """
        Apply a partial edit.

        When quantity or override_quantity is part of the edit, the item is
        re-priced from its effective quantity and keeps its id. Price overrides
        never touch the computed breakdown.
        """
        changes = updates.model_dump(include=updates.model_fields_set)
        # Only overrides can be cleared
        for key in ("quantity", "description"):
            if key in changes and changes[key] is None:
                del changes[key]
        items: List[BidLineItem] = []
        found = False

        for item in bid.line_items:
            if item.id != line_item_id:
                items.append(item)
                continue
            found = True
            edited = item.model_copy(update=changes)
            if _RECALC_FIELDS & updates.model_fields_set:
                edited = self._reprice(edited)
            items.append(edited)

        if not found:
            raise LineItemNotFoundError(line_item_id)
        return self.refresh(bid.model_copy(update={"line_items": items}))

    def set_margin(self, bid: Bid, margin: float) -> Bid:
        return self.refresh(bid.model_copy(update={"margin": clamp_margin(margin)}))

    def replace_snapshot(self, bid: Bid, snapshot: MeasurementSnapshot) -> Bid:
        return self.refresh(bid.model_copy(update={"measurements": snapshot}))

    def _reprice(self, item: BidLineItem) -> BidLineItem:
        service = self.config.get_service(item.service_type_id)
        if service is None:
            logger.debug("Service %s not in config %s; keeping previous pricing", item.service_type_id, self.config.id)
            return item
        repriced = self.build_line_item(
            service,
            item.effective_quantity,
            description=item.description,
            line_item_id=item.id,
        )
        return repriced.model_copy(
            update={
                "quantity": item.quantity,
                "override_price": item.override_price,
                "override_quantity": item.override_quantity,
            }
        )
