"""
Tests for full trade estimate recomputation over the default site catalog.
"""

import pytest

from bid_engines.pricing_catalog.catalog import create_default_site_catalog
from bid_engines.pricing_catalog.models import TradeDefinition
from bid_engines.site_objects.models import GeometricObject, ObjectMeasurements, SiteObjectType
from bid_engines.site_objects.store import ObjectClassificationStore
from bid_engines.trade_estimates.models import SiteEstimateRequest
from bid_engines.trade_estimates.service import (
    SiteEstimate,
    TradeEstimateService,
    compute_trade_estimates,
    estimates_hash,
    grand_total,
)

CATALOG = create_default_site_catalog()


class EchoPort:
    def measure(self, geometry):
        return ObjectMeasurements(**geometry.get("measured", {}))


def site_objects():
    return [
        GeometricObject(
            id="lot", object_type=SiteObjectType.PARKING_SURFACE,
            geometry={"type": "Polygon"}, measurements=ObjectMeasurements(area=10000, perimeter=400),
        ),
        GeometricObject(
            id="crack-1", object_type=SiteObjectType.CRACK,
            geometry={"type": "LineString"}, measurements=ObjectMeasurements(length=500),
        ),
    ]


def test_only_trades_with_work_appear():
    estimates = compute_trade_estimates(site_objects(), CATALOG.trades, CATALOG.services)

    assert [e.trade_id for e in estimates] == ["asph", "seal", "crck"]
    for estimate in estimates:
        assert estimate.line_items
        assert estimate.total == pytest.approx(estimate.subtotal + estimate.mobilization + estimate.margin_amount)


def test_paving_estimate():
    estimates = compute_trade_estimates(site_objects(), CATALOG.trades, CATALOG.services)
    paving = next(e for e in estimates if e.trade_id == "asph")
    item = paving.line_items[0]

    # 10000 sq ft * 1.05 waste
    assert item.quantity == 10500
    assert item.service_id == "asph-ovl2"
    assert item.labor_hours == 21.0
    assert item.material_cost == 15225
    assert item.source_object_ids == ["lot"]
    assert paving.mobilization == 1500


def test_recompute_is_idempotent():
    first = compute_trade_estimates(site_objects(), CATALOG.trades, CATALOG.services)
    second = compute_trade_estimates(site_objects(), CATALOG.trades, CATALOG.services)

    assert first == second
    assert estimates_hash(first) == estimates_hash(second)


def test_empty_inputs():
    assert compute_trade_estimates([], CATALOG.trades, CATALOG.services) == []
    assert compute_trade_estimates(site_objects(), [], CATALOG.services) == []


def test_trade_with_unknown_services_omitted():
    estimates = compute_trade_estimates(site_objects(), CATALOG.trades, services=[])
    assert estimates == []


def test_grand_total():
    estimates = compute_trade_estimates(site_objects(), CATALOG.trades, CATALOG.services)
    assert grand_total(estimates) == pytest.approx(sum(e.total for e in estimates))
    assert grand_total([]) == 0


class TestSiteEstimate:

    @pytest.fixture
    def session(self):
        store = ObjectClassificationStore(EchoPort())
        store.add(SiteObjectType.PARKING_SURFACE, {"type": "Polygon", "measured": {"area": 10000}}, object_id="lot")
        return SiteEstimate(store, CATALOG.trades, CATALOG.services)

    def test_stale_until_recomputed(self, session):
        assert session.is_stale
        assert session.estimates == []

        estimates = session.recompute()
        assert not session.is_stale
        assert [e.trade_id for e in estimates] == ["asph", "seal"]

    def test_store_mutation_makes_stale(self, session):
        session.recompute()
        session.store.add(SiteObjectType.CRACK, {"type": "LineString", "measured": {"length": 300}})

        assert session.is_stale
        # Previous results stay readable until recompute()
        assert [e.trade_id for e in session.estimates] == ["asph", "seal"]

        session.recompute()
        assert [e.trade_id for e in session.estimates] == ["asph", "seal", "crck"]

    def test_config_change_makes_stale(self, session):
        session.recompute()
        session.set_trades([t for t in CATALOG.trades if t.id == "seal"])
        assert session.is_stale

        session.recompute()
        assert [e.trade_id for e in session.estimates] == ["seal"]
        assert session.total() == pytest.approx(session.estimates[0].total)

    def test_geometry_update_reprices(self, session):
        before = session.recompute()
        session.store.update_geometry("lot", {"type": "Polygon", "measured": {"area": 20000}})
        after = session.recompute()

        assert after[0].line_items[0].quantity == 2 * before[0].line_items[0].quantity


def test_service_response():
    request = SiteEstimateRequest(objects=site_objects(), trades=CATALOG.trades, services=CATALOG.services)
    response = TradeEstimateService().estimate(request)

    assert len(response.estimates) == 3
    assert response.grand_total == pytest.approx(sum(e.total for e in response.estimates))
    assert len(response.estimate_hash) == 16


def test_request_epsilon_applies():
    trade = TradeDefinition.model_validate(
        {
            "id": "crck",
            "name": "Crack Repair",
            "consumes": [{"object_type": "crack", "quantity_source": "length", "service_id": "CRCK-HOT"}],
        }
    )
    request = SiteEstimateRequest(
        objects=site_objects(), trades=[trade], services=CATALOG.services, quantity_epsilon=1000
    )
    assert TradeEstimateService().estimate(request).estimates == []
