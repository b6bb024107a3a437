"""Bid pricing service used by the HTTP layer."""
from __future__ import annotations

from typing import Optional

from bid_engines.bid_pricing.engine import BidPricingEngine
from bid_engines.bid_pricing.models import Bid, BidRecalculateRequest


class BidPricingService:
    """Recalculates client-held bids; holds no bid state itself."""

    def recalculate(self, request: BidRecalculateRequest) -> Bid:
        if request.bid.pricing_config_id != request.config.id:
            raise ValueError(
                f"Bid {request.bid.id} was priced with config '{request.bid.pricing_config_id}', "
                f"not '{request.config.id}'"
            )
        return BidPricingEngine(request.config).refresh(request.bid)


_default_service: Optional[BidPricingService] = None


def get_bid_pricing_service() -> BidPricingService:
    global _default_service
    if _default_service is None:
        _default_service = BidPricingService()
    return _default_service


def set_bid_pricing_service(service: BidPricingService) -> None:
    """Override default service (for testing)."""
    global _default_service
    _default_service = service
