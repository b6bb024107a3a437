"""Trade Estimates module - object-driven, trade-partitioned pricing."""

from bid_engines.trade_estimates.aggregator import aggregate_trade
from bid_engines.trade_estimates.mapper import map_consumption
from bid_engines.trade_estimates.models import (
    ComputedLineItem,
    ComputedTradeEstimate,
    ServiceQuantity,
    SiteEstimateRequest,
    SiteEstimateResponse,
)
from bid_engines.trade_estimates.service import (
    SiteEstimate,
    TradeEstimateService,
    compute_trade_estimates,
    get_trade_estimate_service,
    set_trade_estimate_service,
)

__all__ = [
    "ComputedLineItem",
    "ComputedTradeEstimate",
    "ServiceQuantity",
    "SiteEstimate",
    "SiteEstimateRequest",
    "SiteEstimateResponse",
    "TradeEstimateService",
    "aggregate_trade",
    "compute_trade_estimates",
    "get_trade_estimate_service",
    "map_consumption",
    "set_trade_estimate_service",
]
