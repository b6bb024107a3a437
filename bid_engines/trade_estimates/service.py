"""
Trade Estimate Service - Recompute trade-partitioned estimates from scratch.

Implements:
- compute_trade_estimates: pure objects + trades + services -> estimates
- SiteEstimate: caller-owned session with an explicit recompute() after a
  batch of store mutations, and staleness tracking
- TradeEstimateService: request/response adapter used by the HTTP layer
"""

from __future__ import annotations

import hashlib
import json
from typing import Iterable, List, Optional, Sequence

from bid_engines.pricing_catalog.models import ServiceDefinition, TradeDefinition
from bid_engines.site_objects.models import GeometricObject
from bid_engines.site_objects.store import ObjectClassificationStore
from bid_engines.trade_estimates.aggregator import aggregate_trade
from bid_engines.trade_estimates.mapper import map_consumption
from bid_engines.trade_estimates.models import (
    ComputedTradeEstimate,
    SiteEstimateRequest,
    SiteEstimateResponse,
)


def compute_trade_estimates(
    objects: Iterable[GeometricObject],
    trades: Sequence[TradeDefinition],
    services: Sequence[ServiceDefinition],
    epsilon: Optional[float] = None,
) -> List[ComputedTradeEstimate]:
    """Price every trade; trades with nothing to do are left out."""
    objects = list(objects)
    if not trades or not objects:
        return []

    estimates: List[ComputedTradeEstimate] = []
    for trade in trades:
        quantities = map_consumption(objects, trade, epsilon=epsilon)
        estimate = aggregate_trade(trade, quantities, services)
        if estimate is not None:
            estimates.append(estimate)
    return estimates


def grand_total(estimates: Iterable[ComputedTradeEstimate]) -> float:
    return sum(estimate.total for estimate in estimates)


def estimates_hash(estimates: Iterable[ComputedTradeEstimate]) -> str:
    """Content hash; equal inputs always hash equal."""
    payload = json.dumps([e.model_dump(mode="json") for e in estimates], sort_keys=True)
    return hashlib.sha256(payload.encode()).hexdigest()[:16]


class SiteEstimate:
    """
    Objects, trade rules and services for one site.

    Estimates are only rebuilt when recompute() is called; any mutation of the
    store or the configuration since then makes them stale.
    """

    def __init__(
        self,
        store: ObjectClassificationStore,
        trades: Optional[Sequence[TradeDefinition]] = None,
        services: Optional[Sequence[ServiceDefinition]] = None,
        epsilon: Optional[float] = None,
    ):
        self.store = store
        self._trades: List[TradeDefinition] = list(trades or [])
        self._services: List[ServiceDefinition] = list(services or [])
        self._epsilon = epsilon
        self._config_revision = 0
        self._computed_at: Optional[tuple[int, int]] = None
        self._estimates: List[ComputedTradeEstimate] = []

    @property
    def trades(self) -> List[TradeDefinition]:
        return list(self._trades)

    @property
    def services(self) -> List[ServiceDefinition]:
        return list(self._services)

    def set_trades(self, trades: Sequence[TradeDefinition]) -> None:
        self._trades = list(trades)
        self._config_revision += 1

    def set_services(self, services: Sequence[ServiceDefinition]) -> None:
        self._services = list(services)
        self._config_revision += 1

    @property
    def is_stale(self) -> bool:
        return self._computed_at != (self.store.revision, self._config_revision)

    @property
    def estimates(self) -> List[ComputedTradeEstimate]:
        """Estimates from the last recompute(); check is_stale before trusting them."""
        return list(self._estimates)

    def recompute(self) -> List[ComputedTradeEstimate]:
        self._estimates = compute_trade_estimates(
            self.store.list(), self._trades, self._services, epsilon=self._epsilon
        )
        self._computed_at = (self.store.revision, self._config_revision)
        return self.estimates

    def total(self) -> float:
        return grand_total(self._estimates)


class TradeEstimateService:
    """Stateless estimate generation for request payloads."""

    def estimate(self, request: SiteEstimateRequest) -> SiteEstimateResponse:
        estimates = compute_trade_estimates(
            request.objects,
            request.trades,
            request.services,
            epsilon=request.quantity_epsilon,
        )
        return SiteEstimateResponse(
            estimates=estimates,
            grand_total=grand_total(estimates),
            estimate_hash=estimates_hash(estimates),
        )


# Module-level default service
_default_service: Optional[TradeEstimateService] = None


def get_trade_estimate_service() -> TradeEstimateService:
    global _default_service
    if _default_service is None:
        _default_service = TradeEstimateService()
    return _default_service


def set_trade_estimate_service(service: TradeEstimateService) -> None:
    """Override default service (for testing)."""
    global _default_service
    _default_service = service
