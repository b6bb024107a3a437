"""FastAPI routes exposing the active pricing catalog (read-only)."""

from typing import List

from fastapi import APIRouter

from bid_engines.common.error_envelope import not_found_error
from bid_engines.pricing_catalog.catalog import get_catalog_registry
from bid_engines.pricing_catalog.models import PricingConfig, SiteCatalog

router = APIRouter(prefix="/pricing", tags=["pricing_catalog"])


@router.get("/configs", response_model=List[str])
def list_pricing_configs() -> List[str]:
    return get_catalog_registry().list_ids()


@router.get("/configs/{config_id}", response_model=PricingConfig)
def get_pricing_config(config_id: str) -> PricingConfig:
    config = get_catalog_registry().get(config_id)
    if config is None:
        not_found_error("pricing_config", config_id)
    return config


@router.get("/site-catalog", response_model=SiteCatalog)
def get_site_catalog() -> SiteCatalog:
    return get_catalog_registry().site_catalog
