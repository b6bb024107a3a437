"""
FastAPI routes for trade-partitioned site estimates.

POST /site-estimates/compute
- Input: classified objects, trades and services (trades/services fall back
  to the active site catalog when omitted)
- Output: SiteEstimateResponse with per-trade estimates and grand total
"""

import logging

from fastapi import APIRouter

from bid_engines.common.error_envelope import error_response
from bid_engines.pricing_catalog.catalog import get_catalog_registry
from bid_engines.trade_estimates.models import SiteEstimateRequest, SiteEstimateResponse
from bid_engines.trade_estimates.service import get_trade_estimate_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/site-estimates", tags=["trade_estimates"])


@router.post("/compute", response_model=SiteEstimateResponse)
def compute_site_estimate(request: SiteEstimateRequest) -> SiteEstimateResponse:
    if not request.trades or not request.services:
        catalog = get_catalog_registry().site_catalog
        request = request.model_copy(
            update={
                "trades": request.trades or catalog.trades,
                "services": request.services or catalog.services,
            }
        )
    try:
        return get_trade_estimate_service().estimate(request)
    except ValueError as exc:
        logger.exception("Site estimate failed")
        error_response(
            "site_estimate.invalid",
            str(exc),
            status_code=422,
            resource_kind="site_estimate",
        )
