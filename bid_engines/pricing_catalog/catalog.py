"""
Pricing Catalog - Default rate tables, site trades, and catalog loading.

Implements:
- Default pricing config for the manual bid surface
- Default site trades with the services their rules feed
- JSON catalog loading (replaces the defaults when configured)
- Registry of pricing configs by id
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from bid_engines.config.runtime_config import get_pricing_catalog_path
from bid_engines.pricing_catalog.models import (
    CatalogFile,
    ConsumptionRule,
    PricingConfig,
    PricingModel,
    QuantitySource,
    ServiceDefinition,
    SiteCatalog,
    TradeDefinition,
)
from bid_engines.site_objects.models import SiteObjectType

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_ID = "default"

# Burden applied to site-trade crews (payroll taxes, insurance)
SITE_LABOR_BURDEN = 1.35


def create_default_pricing_config() -> PricingConfig:
    """
    Rate table for the manual bid surface.

    Rates are illustrative starting points; contractors replace them with
    their own numbers.
    """
    services = [
        ServiceDefinition(
            id="painting-interior", name="Interior Painting", unit="sq ft",
            pricing_model=PricingModel.AREA, production_rate=200, crew_size=2, hourly_rate=28,
            material_cost_per_unit=0.35, material_waste_factor=1.10, equipment_cost_fixed=25,
            minimum_charge=350,
        ),
        ServiceDefinition(
            id="painting-exterior", name="Exterior Painting", unit="sq ft",
            pricing_model=PricingModel.AREA, production_rate=150, crew_size=2, hourly_rate=30,
            material_cost_per_unit=0.40, material_waste_factor=1.15, equipment_cost_fixed=75,
            minimum_charge=500,
        ),
        ServiceDefinition(
            id="sealcoating", name="Sealcoating", unit="sq ft",
            pricing_model=PricingModel.AREA, production_rate=2000, crew_size=2, hourly_rate=25,
            material_cost_per_unit=0.08, material_waste_factor=1.10, equipment_cost_fixed=50,
            minimum_charge=350,
        ),
        ServiceDefinition(
            id="pressure-washing", name="Pressure Washing", unit="sq ft",
            pricing_model=PricingModel.AREA, production_rate=500, crew_size=1, hourly_rate=25,
            material_cost_per_unit=0.02, material_waste_factor=1.05, equipment_cost_fixed=40,
            minimum_charge=150,
        ),
        ServiceDefinition(
            id="line-striping", name="Line Striping", unit="linear ft",
            pricing_model=PricingModel.LINEAR, production_rate=500, crew_size=2, hourly_rate=25,
            material_cost_per_unit=0.15, material_waste_factor=1.05, equipment_cost_fixed=30,
            minimum_charge=200,
        ),
        ServiceDefinition(
            id="fencing", name="Fence Installation", unit="linear ft",
            pricing_model=PricingModel.LINEAR, production_rate=20, crew_size=2, hourly_rate=30,
            material_cost_per_unit=15.00, material_waste_factor=1.08, equipment_cost_fixed=50,
            minimum_charge=500,
        ),
        ServiceDefinition(
            id="crack-filling", name="Crack Filling", unit="linear ft",
            pricing_model=PricingModel.LINEAR, production_rate=200, crew_size=2, hourly_rate=25,
            material_cost_per_unit=0.50, material_waste_factor=1.15, equipment_cost_fixed=40,
            minimum_charge=250,
        ),
        ServiceDefinition(
            id="landscaping-mulch", name="Mulching", unit="sq ft",
            pricing_model=PricingModel.AREA, production_rate=100, crew_size=2, hourly_rate=22,
            material_cost_per_unit=0.50, material_waste_factor=1.10, equipment_cost_fixed=30,
            minimum_charge=200,
        ),
    ]
    return PricingConfig(
        id=DEFAULT_CONFIG_ID,
        name="Default Pricing",
        service_types=services,
        default_margin=0.25,
        labor_burden_rate=1.30,
    )


def _site_service(
    code: str,
    name: str,
    unit: str,
    pricing_model: PricingModel,
    hourly_rate: float,
    material_cost: float,
    equipment_hourly: float,
    production_rate: float,
    crew_size: int,
) -> ServiceDefinition:
    return ServiceDefinition(
        id=code.lower(),
        code=code,
        name=name,
        unit=unit,
        pricing_model=pricing_model,
        production_rate=production_rate,
        crew_size=crew_size,
        hourly_rate=hourly_rate,
        labor_burden_rate=SITE_LABOR_BURDEN,
        material_cost_per_unit=material_cost,
        material_waste_factor=1.0,
        equipment_cost_hourly=equipment_hourly,
    )


def _rule(
    object_type: SiteObjectType,
    source: QuantitySource,
    service_code: str,
    waste_factor: Optional[float] = None,
) -> ConsumptionRule:
    return ConsumptionRule(
        object_type=object_type,
        quantity_source=source,
        service_id=service_code,
        waste_factor=waste_factor,
    )


def create_default_site_catalog() -> SiteCatalog:
    """Parking-lot trades and services. Rules reference services by code."""
    area, linear, unit = PricingModel.AREA, PricingModel.LINEAR, PricingModel.UNIT
    services = [
        _site_service("ASPH-OVL2", 'HMA Overlay 2"', "sq ft", area, 0.85, 1.45, 0.35, 500, 4),
        _site_service("SEAL-2CT", "Coal Tar Sealcoat 2-Coat", "sq ft", area, 0.04, 0.08, 0.02, 3000, 3),
        _site_service("STRP-STL", "Standard Stall Striping", "each", unit, 3.50, 1.25, 0.50, 30, 2),
        _site_service("STRP-ADA", "ADA Stall Complete", "each", unit, 45.00, 35.00, 5.00, 4, 2),
        _site_service("STRP-FLN", "Fire Lane Curb Paint", "lin ft", linear, 0.75, 0.45, 0.15, 200, 2),
        _site_service("STRP-CRW", "Crosswalk Striping", "sq ft", area, 0.85, 0.65, 0.20, 150, 2),
        _site_service("STRP-ARW", "Directional Arrow", "each", unit, 18.00, 8.00, 2.00, 8, 2),
        _site_service("STRP-EDG", '4" Edge Line', "lin ft", linear, 0.15, 0.08, 0.03, 500, 2),
        _site_service("CONC-FLT4", 'Concrete Flatwork 4"', "sq ft", area, 3.50, 4.25, 1.00, 100, 4),
        _site_service("CONC-CRB", "Concrete Curb", "lin ft", linear, 8.50, 6.00, 2.50, 50, 3),
        _site_service("CONC-GTR", "Concrete Gutter", "lin ft", linear, 12.00, 8.50, 3.00, 40, 3),
        _site_service("CONC-ADA", "ADA Ramp", "each", unit, 450.00, 380.00, 75.00, 2, 4),
        _site_service("CRCK-HOT", "Hot Rubberized Crack Seal", "lin ft", linear, 0.45, 0.35, 0.15, 300, 2),
        _site_service("SITE-BLR", "Steel Bollard Install", "each", unit, 125.00, 185.00, 35.00, 4, 2),
        _site_service("SITE-LPL", "Light Pole Base Repair", "each", unit, 350.00, 275.00, 85.00, 2, 3),
        _site_service("SITE-SGN", "Sign Post Install", "each", unit, 85.00, 120.00, 25.00, 6, 2),
        _site_service("SITE-DRN", "Catch Basin Repair", "each", unit, 225.00, 185.00, 65.00, 3, 2),
    ]

    T, Q = SiteObjectType, QuantitySource
    trades = [
        TradeDefinition(
            id="asph", code="ASPH", name="Asphalt Paving", mobilization_cost=1500, default_margin=0.25,
            consumes=[
                _rule(T.PARKING_SURFACE, Q.AREA, "ASPH-OVL2", 1.05),
                _rule(T.DRIVE_LANE, Q.AREA, "ASPH-OVL2", 1.05),
                _rule(T.LOADING_AREA, Q.AREA, "ASPH-OVL2", 1.05),
            ],
        ),
        TradeDefinition(
            id="seal", code="SEAL", name="Sealcoating", mobilization_cost=500, default_margin=0.30,
            consumes=[
                _rule(T.PARKING_SURFACE, Q.AREA, "SEAL-2CT", 1.0),
                _rule(T.DRIVE_LANE, Q.AREA, "SEAL-2CT", 1.0),
            ],
        ),
        TradeDefinition(
            id="strp", code="STRP", name="Striping & Markings", mobilization_cost=350, default_margin=0.35,
            consumes=[
                _rule(T.PARKING_STALL, Q.COUNT, "STRP-STL"),
                _rule(T.STALL_GROUP, Q.COUNT, "STRP-STL"),
                _rule(T.ADA_SPACE, Q.COUNT, "STRP-ADA"),
                _rule(T.FIRE_LANE, Q.LENGTH, "STRP-FLN"),
                _rule(T.CROSSWALK, Q.AREA, "STRP-CRW"),
                _rule(T.DIRECTIONAL_ARROW, Q.COUNT, "STRP-ARW"),
                _rule(T.EDGE_LINE, Q.LENGTH, "STRP-EDG"),
            ],
        ),
        TradeDefinition(
            id="conc", code="CONC", name="Concrete", mobilization_cost=800, default_margin=0.25,
            consumes=[
                _rule(T.SIDEWALK, Q.AREA, "CONC-FLT4", 1.0),
                _rule(T.CURB, Q.LENGTH, "CONC-CRB"),
                _rule(T.GUTTER, Q.LENGTH, "CONC-GTR"),
                _rule(T.ADA_RAMP, Q.COUNT, "CONC-ADA"),
                _rule(T.MEDIAN, Q.AREA, "CONC-FLT4", 1.0),
                _rule(T.ISLAND, Q.AREA, "CONC-FLT4", 1.0),
            ],
        ),
        TradeDefinition(
            id="crck", code="CRCK", name="Crack Repair", mobilization_cost=300, default_margin=0.40,
            consumes=[_rule(T.CRACK, Q.LENGTH, "CRCK-HOT")],
        ),
        TradeDefinition(
            id="site", code="SITE", name="Site Work", mobilization_cost=500, default_margin=0.30,
            consumes=[
                _rule(T.BOLLARD, Q.COUNT, "SITE-BLR"),
                _rule(T.LIGHT_POLE, Q.COUNT, "SITE-LPL"),
                _rule(T.SIGN, Q.COUNT, "SITE-SGN"),
                _rule(T.DRAIN, Q.COUNT, "SITE-DRN"),
            ],
        ),
    ]
    return SiteCatalog(trades=trades, services=services)


def load_catalog_file(path: str | Path) -> CatalogFile:
    """Read a JSON catalog; raises FileNotFoundError or pydantic ValidationError."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing pricing catalog at {path}")
    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    return CatalogFile.model_validate(data)


class CatalogRegistry:
    """Pricing configs by id, plus the active site catalog."""

    def __init__(self, catalog_file: Optional[CatalogFile] = None):
        self._configs: Dict[str, PricingConfig] = {}
        self.register(create_default_pricing_config())
        self.site_catalog = create_default_site_catalog()

        if catalog_file is not None:
            for config in catalog_file.pricing_configs:
                self.register(config)
            if catalog_file.site_catalog is not None:
                self.site_catalog = catalog_file.site_catalog

    def register(self, config: PricingConfig) -> None:
        self._configs[config.id] = config

    def get(self, config_id: str) -> Optional[PricingConfig]:
        return self._configs.get(config_id)

    def list_ids(self) -> List[str]:
        return sorted(self._configs)


_registry: Optional[CatalogRegistry] = None


def get_catalog_registry() -> CatalogRegistry:
    """Registry built from defaults, overlaid with BID_ENGINES_PRICING_CATALOG when set."""
    global _registry
    if _registry is None:
        path = get_pricing_catalog_path()
        catalog_file = None
        if path:
            logger.info("Loading pricing catalog from %s", path)
            catalog_file = load_catalog_file(path)
        _registry = CatalogRegistry(catalog_file)
    return _registry


def set_catalog_registry(registry: Optional[CatalogRegistry]) -> None:
    """Override (or reset with None) the default registry."""
    global _registry
    _registry = registry
