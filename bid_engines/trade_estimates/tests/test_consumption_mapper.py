"""
Tests for consumption-rule quantity aggregation.
"""

import pytest

from bid_engines.pricing_catalog.models import ConsumptionRule, QuantitySource, TradeDefinition
from bid_engines.site_objects.models import GeometricObject, ObjectMeasurements, SiteObjectType
from bid_engines.trade_estimates.mapper import contribution, map_consumption, rule_matches


def make_object(obj_id, object_type, sub_type=None, **measured) -> GeometricObject:
    return GeometricObject(
        id=obj_id,
        object_type=object_type,
        sub_type=sub_type,
        geometry={"type": "Polygon"},
        measurements=ObjectMeasurements(**measured),
    )


def paving_trade(*rules: ConsumptionRule) -> TradeDefinition:
    return TradeDefinition(id="asph", name="Asphalt Paving", consumes=list(rules))


def area_rule(object_type=SiteObjectType.PARKING_SURFACE, service_id="ASPH-OVL2", **kwargs) -> ConsumptionRule:
    return ConsumptionRule(
        object_type=object_type,
        quantity_source=QuantitySource.AREA,
        service_id=service_id,
        **kwargs,
    )


def test_quantities_add_with_waste_per_contribution():
    objects = [
        make_object("p1", SiteObjectType.PARKING_SURFACE, area=1000),
        make_object("p2", SiteObjectType.PARKING_SURFACE, area=2000),
    ]
    result = map_consumption(objects, paving_trade(area_rule(waste_factor=1.05)))

    agg = result["ASPH-OVL2"]
    assert agg.quantity == pytest.approx(1000 * 1.05 + 2000 * 1.05)
    assert agg.source_object_ids == ["p1", "p2"]


def test_rules_feeding_one_service_merge():
    objects = [
        make_object("p1", SiteObjectType.PARKING_SURFACE, area=1000),
        make_object("d1", SiteObjectType.DRIVE_LANE, area=500),
        make_object("c1", SiteObjectType.CURB, length=80),
    ]
    trade = paving_trade(area_rule(), area_rule(SiteObjectType.DRIVE_LANE))
    result = map_consumption(objects, trade)

    assert list(result) == ["ASPH-OVL2"]
    assert result["ASPH-OVL2"].quantity == pytest.approx(1500)
    assert result["ASPH-OVL2"].source_object_ids == ["p1", "d1"]


def test_sub_type_filter():
    objects = [
        make_object("a", SiteObjectType.PARKING_SURFACE, sub_type="asphalt", area=100),
        make_object("b", SiteObjectType.PARKING_SURFACE, sub_type="concrete", area=200),
        make_object("c", SiteObjectType.PARKING_SURFACE, area=400),
    ]
    result = map_consumption(objects, paving_trade(area_rule(sub_types=["asphalt"])))

    assert result["ASPH-OVL2"].quantity == pytest.approx(100)
    assert result["ASPH-OVL2"].source_object_ids == ["a"]


def test_rule_without_sub_types_matches_any():
    rule = area_rule()
    assert rule_matches(rule, make_object("a", SiteObjectType.PARKING_SURFACE, sub_type="gravel"))
    assert not rule_matches(rule, make_object("b", SiteObjectType.SIDEWALK))


def test_missing_measurement_contributes_zero():
    rule = ConsumptionRule(
        object_type=SiteObjectType.BOLLARD,
        quantity_source=QuantitySource.COUNT,
        service_id="SITE-BLR",
    )
    obj = make_object("b1", SiteObjectType.BOLLARD)

    assert contribution(rule, obj) == 0.0
    assert map_consumption([obj], paving_trade(rule)) == {}


def test_near_zero_aggregate_dropped():
    objects = [make_object("p1", SiteObjectType.PARKING_SURFACE, area=1e-9)]
    trade = paving_trade(area_rule())

    assert map_consumption(objects, trade) == {}
    assert "ASPH-OVL2" in map_consumption(objects, trade, epsilon=0.0)


def test_zero_waste_factor_drops_service():
    objects = [make_object("p1", SiteObjectType.PARKING_SURFACE, area=1000)]
    assert map_consumption(objects, paving_trade(area_rule(waste_factor=0.0))) == {}


def test_epsilon_from_runtime_config(monkeypatch):
    monkeypatch.setenv("BID_ENGINES_QUANTITY_EPSILON", "10")
    objects = [make_object("p1", SiteObjectType.PARKING_SURFACE, area=5)]

    assert map_consumption(objects, paving_trade(area_rule())) == {}


def test_negative_measurements_pass_through():
    objects = [make_object("p1", SiteObjectType.PARKING_SURFACE, area=-50)]
    result = map_consumption(objects, paving_trade(area_rule()))

    assert result["ASPH-OVL2"].quantity == pytest.approx(-50)
