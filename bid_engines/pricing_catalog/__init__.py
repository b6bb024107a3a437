"""Pricing Catalog module - service, trade and rate-table reference data."""

from bid_engines.pricing_catalog.catalog import (
    CatalogRegistry,
    create_default_pricing_config,
    create_default_site_catalog,
    get_catalog_registry,
    load_catalog_file,
    set_catalog_registry,
)
from bid_engines.pricing_catalog.models import (
    ConsumptionRule,
    PricingConfig,
    PricingModel,
    QuantitySource,
    ServiceDefinition,
    SiteCatalog,
    TradeDefinition,
)

__all__ = [
    "CatalogRegistry",
    "ConsumptionRule",
    "PricingConfig",
    "PricingModel",
    "QuantitySource",
    "ServiceDefinition",
    "SiteCatalog",
    "TradeDefinition",
    "create_default_pricing_config",
    "create_default_site_catalog",
    "get_catalog_registry",
    "load_catalog_file",
    "set_catalog_registry",
]
