"""
Trade Estimate Models - Derived, trade-partitioned pricing output.

Defines:
- ServiceQuantity: Aggregated quantity feeding one service
- ComputedLineItem: Priced service inside a trade estimate
- ComputedTradeEstimate: Trade subtotal, mobilization, margin and total

None of these are persisted; they are rebuilt wholesale on every recompute.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from bid_engines.pricing_catalog.models import ServiceDefinition, TradeDefinition
from bid_engines.site_objects.models import GeometricObject


class ServiceQuantity(BaseModel):
    """Quantity aggregated from every object feeding a service."""
    service_id: str
    quantity: float = 0.0
    source_object_ids: List[str] = Field(default_factory=list)


class ComputedLineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    service_id: str
    service_name: str
    quantity: float
    unit: str
    labor_hours: float
    labor_cost: float
    material_cost: float
    equipment_cost: float
    subtotal: float  # After minimum-charge enforcement
    minimum_applied: bool = False
    source_object_ids: List[str] = Field(default_factory=list)


class ComputedTradeEstimate(BaseModel):
    model_config = ConfigDict(frozen=True)

    trade_id: str
    trade_name: str
    trade_code: Optional[str] = None
    line_items: List[ComputedLineItem]
    subtotal: float
    mobilization: float
    margin: float
    margin_amount: float
    total: float


class SiteEstimateRequest(BaseModel):
    """Everything needed to price a site in one call."""
    objects: List[GeometricObject] = Field(default_factory=list)
    trades: List[TradeDefinition] = Field(default_factory=list)
    services: List[ServiceDefinition] = Field(default_factory=list)
    quantity_epsilon: Optional[float] = Field(default=None, ge=0.0)


class SiteEstimateResponse(BaseModel):
    estimates: List[ComputedTradeEstimate] = Field(default_factory=list)
    grand_total: float = 0.0
    estimate_hash: str
