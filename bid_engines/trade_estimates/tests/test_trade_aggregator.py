"""
Tests for pricing aggregated quantities into a trade estimate.
"""

import pytest

from bid_engines.pricing_catalog.models import PricingModel, ServiceDefinition, TradeDefinition
from bid_engines.trade_estimates.aggregator import aggregate_trade, index_services, price_line_item
from bid_engines.trade_estimates.models import ServiceQuantity


def hourly_service(**overrides) -> ServiceDefinition:
    data = dict(
        id="svc-labor",
        code="SVC-LABOR",
        name="Crew Labor",
        unit="hr",
        pricing_model=PricingModel.HOURLY,
        crew_size=1,
        hourly_rate=100,
        minimum_charge=500,
    )
    data.update(overrides)
    return ServiceDefinition(**data)


TRADE = TradeDefinition(id="site", name="Site Work", mobilization_cost=200, default_margin=0.25)


def quantities(**by_service) -> dict:
    return {
        key: ServiceQuantity(service_id=key, quantity=qty, source_object_ids=["o1"])
        for key, qty in by_service.items()
    }


def test_minimum_charge_enforced():
    item = price_line_item(hourly_service(), ServiceQuantity(service_id="svc-labor", quantity=3))

    assert item.subtotal == 500
    assert item.labor_cost == 300
    assert item.minimum_applied is True


def test_trade_totals():
    estimate = aggregate_trade(TRADE, quantities(**{"svc-labor": 3}), [hourly_service()])

    assert estimate is not None
    assert estimate.subtotal == 500
    assert estimate.mobilization == 200
    assert estimate.margin == 0.25
    assert estimate.margin_amount == 125
    assert estimate.total == 825
    assert estimate.line_items[0].source_object_ids == ["o1"]


def test_service_resolved_by_code():
    estimate = aggregate_trade(TRADE, quantities(**{"SVC-LABOR": 10}), [hourly_service()])

    assert estimate.line_items[0].service_id == "svc-labor"
    assert estimate.line_items[0].subtotal == 1000
    assert estimate.line_items[0].minimum_applied is False


def test_unknown_service_skipped():
    qty = quantities(**{"svc-labor": 10, "GHOST": 99})
    estimate = aggregate_trade(TRADE, qty, [hourly_service()])

    assert [item.service_id for item in estimate.line_items] == ["svc-labor"]


def test_no_line_items_returns_none():
    assert aggregate_trade(TRADE, quantities(GHOST=5), [hourly_service()]) is None
    assert aggregate_trade(TRADE, {}, [hourly_service()]) is None
    assert aggregate_trade(TRADE, quantities(**{"svc-labor": 0}), [hourly_service()]) is None


def test_display_rounding():
    service = hourly_service(pricing_model=PricingModel.AREA, production_rate=3, hourly_rate=10, minimum_charge=0)
    item = price_line_item(service, ServiceQuantity(service_id="svc-labor", quantity=1.5))

    assert item.quantity == 2
    assert item.labor_hours == 0.5
    assert item.labor_cost == 5


def test_ids_win_over_codes():
    a = hourly_service(id="x", code="y", name="A")
    b = hourly_service(id="y", code=None, name="B")

    assert index_services([b, a])["y"].name == "B"
    assert index_services([a, b])["y"].name == "B"


def test_margin_rounds_half_up():
    trade = TradeDefinition(id="t", name="T", default_margin=0.25)
    service = hourly_service(minimum_charge=0, hourly_rate=1)
    # subtotal 2 (rounded from 2.0) * 0.25 = 0.5 -> 1
    estimate = aggregate_trade(trade, quantities(**{"svc-labor": 2}), [service])

    assert estimate.margin_amount == 1
    assert estimate.total == pytest.approx(3)


def test_id_and_code_references_merge_into_one_line():
    qty = {
        "svc-labor": ServiceQuantity(service_id="svc-labor", quantity=2, source_object_ids=["curb-1"]),
        "SVC-LABOR": ServiceQuantity(service_id="SVC-LABOR", quantity=1, source_object_ids=["gutter-1", "curb-1"]),
    }
    estimate = aggregate_trade(TRADE, qty, [hourly_service()])

    (item,) = estimate.line_items
    assert item.service_id == "svc-labor"
    assert item.labor_cost == 300
    # Minimum charge applies once to the merged quantity
    assert item.subtotal == 500
    assert item.source_object_ids == ["curb-1", "gutter-1"]
    assert estimate.subtotal == 500
