"""
Bid Pricing Models - Manually curated bid and its line items.

Defines:
- MeasurementSnapshot: Immutable capture of a committed drawing session
- BidLineItem: Priced service with optional quantity/price overrides
- Bid: Flat list of line items with margin, totals and risk flags
- LineItemUpdate: Partial edit of a line item
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from bid_engines.pricing_catalog.models import PricingConfig
from bid_engines.risk.models import RiskFlag


def _now() -> datetime:
    return datetime.now(timezone.utc)


class BidStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


class ShapeMeasurement(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: str
    area: float = 0.0
    perimeter: float = 0.0


class HeightMeasurement(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    value: float
    label: str = ""


class MeasurementSnapshot(BaseModel):
    """Point-in-time measurements; a bid swaps the whole snapshot, never parts of it."""
    model_config = ConfigDict(frozen=True)

    total_area: float = 0.0  # sq ft
    total_perimeter: float = 0.0  # ft
    heights: List[HeightMeasurement] = Field(default_factory=list)
    shapes: List[ShapeMeasurement] = Field(default_factory=list)


class BidContext(BaseModel):
    """Customer/job details carried on a bid."""
    customer_id: Optional[str] = None
    customer_name: Optional[str] = None
    job_id: Optional[str] = None
    job_name: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class BidLineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    service_type_id: str
    service_name: str
    description: str = ""
    quantity: float
    unit: str

    # Calculated from the effective quantity
    labor_hours: float
    labor_cost: float
    material_cost: float
    equipment_cost: float
    subtotal: float

    # User adjustments
    override_price: Optional[float] = None
    override_quantity: Optional[float] = None

    @property
    def effective_quantity(self) -> float:
        return self.override_quantity if self.override_quantity is not None else self.quantity

    @property
    def effective_price(self) -> float:
        """Amount this item contributes to bid totals."""
        return self.override_price if self.override_price is not None else self.subtotal


class LineItemUpdate(BaseModel):
    """
    Partial line item edit.

    Only explicitly set fields are applied, so `override_price=None` clears an
    override while omitting it leaves the override alone.
    """
    quantity: Optional[float] = None
    description: Optional[str] = None
    override_price: Optional[float] = None
    override_quantity: Optional[float] = None


class Bid(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
    status: BidStatus = BidStatus.DRAFT
    context: BidContext = Field(default_factory=BidContext)

    measurements: MeasurementSnapshot
    pricing_config_id: str
    line_items: List[BidLineItem] = Field(default_factory=list)
    margin: float = 0.0

    subtotal: float = 0.0
    margin_amount: float = 0.0
    total: float = 0.0

    risk_flags: List[RiskFlag] = Field(default_factory=list)


class BidRecalculateRequest(BaseModel):
    bid: Bid
    config: PricingConfig


class CostBreakdownSummary(BaseModel):
    labor: float = 0.0
    material: float = 0.0
    equipment: float = 0.0
    labor_percent: float = 0.0
    material_percent: float = 0.0
    equipment_percent: float = 0.0
