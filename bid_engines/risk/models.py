from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class RiskType(str, Enum):
    LOW_MARGIN = "low_margin"
    LABOR_HEAVY = "labor_heavy"
    MATERIAL_SENSITIVE = "material_sensitive"
    BELOW_MINIMUM = "below_minimum"


class RiskSeverity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class RiskFlag(BaseModel):
    """Advisory note about a bid's cost structure; never persisted."""
    model_config = ConfigDict(frozen=True)

    type: RiskType
    message: str
    severity: RiskSeverity
