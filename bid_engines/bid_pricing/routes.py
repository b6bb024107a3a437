"""
FastAPI routes for the manual bid surface.

POST /bids/recalculate
- Input: a client-held Bid and the PricingConfig it was priced with
- Output: the Bid with totals and risk flags rebuilt
"""

import logging

from fastapi import APIRouter

from bid_engines.bid_pricing.engine import cost_breakdown
from bid_engines.bid_pricing.models import Bid, BidRecalculateRequest, CostBreakdownSummary
from bid_engines.bid_pricing.service import get_bid_pricing_service
from bid_engines.common.error_envelope import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bids", tags=["bid_pricing"])


@router.post("/recalculate", response_model=Bid)
def recalculate_bid(request: BidRecalculateRequest) -> Bid:
    try:
        return get_bid_pricing_service().recalculate(request)
    except ValueError as exc:
        logger.exception("Bid recalculation rejected")
        error_response(
            "bid_pricing.config_mismatch",
            str(exc),
            status_code=422,
            resource_kind="bid",
            details={"bid_id": request.bid.id, "config_id": request.config.id},
        )


@router.post("/cost-breakdown", response_model=CostBreakdownSummary)
def bid_cost_breakdown(bid: Bid) -> CostBreakdownSummary:
    return cost_breakdown(bid)
