"""Risk module - advisory flags over a priced bid."""

from bid_engines.risk.models import RiskFlag, RiskSeverity, RiskType

__all__ = [
    "RiskFlag",
    "RiskSeverity",
    "RiskType",
]
