from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CostBreakdown(BaseModel):
    """Labor/material/equipment split for one service at one quantity."""
    model_config = ConfigDict(frozen=True)

    quantity: float
    unit: str
    labor_hours: float
    labor_cost: float
    material_cost: float
    equipment_cost: float
    subtotal: float
