"""
Pricing Catalog Models - Service, trade, and rate-table schemas.

Defines:
- ServiceDefinition: Priced unit of work with its cost formula inputs
- TradeDefinition: Contracting discipline with consumption rules
- PricingConfig: Named rate table used by the manual bid surface
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from bid_engines.site_objects.models import SiteObjectType


class PricingModel(str, Enum):
    """How a service's quantity is interpreted."""
    AREA = "area"  # sq ft / production rate
    LINEAR = "linear"  # linear ft / production rate
    HOURLY = "hourly"  # quantity is hours
    FIXED = "fixed"  # flat job, nominal 1 hour
    UNIT = "unit"  # each / production rate (stalls, bollards)


class QuantitySource(str, Enum):
    """Measurement field a consumption rule reads."""
    AREA = "area"
    PERIMETER = "perimeter"
    LENGTH = "length"
    COUNT = "count"


class ServiceDefinition(BaseModel):
    """Immutable reference data for a single service."""
    model_config = ConfigDict(frozen=True)

    id: str
    code: Optional[str] = None  # Alternate lookup key used by trade rules
    name: str
    unit: str = "sq ft"
    pricing_model: PricingModel = PricingModel.AREA
    production_rate: float = Field(default=0.0, ge=0.0)  # units per crew-hour
    crew_size: float = Field(default=1.0, ge=0.0)
    hourly_rate: float = Field(default=0.0, ge=0.0)  # $ per person-hour
    labor_burden_rate: float = Field(default=1.0, ge=0.0)  # 1.3 = 30% burden
    material_cost_per_unit: Optional[float] = None
    material_waste_factor: Optional[float] = None  # 1.10 = 10% waste
    equipment_cost_fixed: Optional[float] = None
    equipment_cost_hourly: Optional[float] = None
    minimum_charge: float = Field(default=0.0, ge=0.0)
    description: str = ""


class ConsumptionRule(BaseModel):
    """Maps a classified object type onto a service quantity."""
    model_config = ConfigDict(frozen=True)

    object_type: SiteObjectType
    sub_types: List[str] = Field(default_factory=list)
    quantity_source: QuantitySource
    service_id: str
    waste_factor: Optional[float] = None


class TradeDefinition(BaseModel):
    """Contracting discipline bundling services under one mobilization and margin."""
    model_config = ConfigDict(frozen=True)

    id: str
    code: Optional[str] = None
    name: str
    consumes: List[ConsumptionRule] = Field(default_factory=list)
    mobilization_cost: float = Field(default=0.0, ge=0.0)
    default_margin: float = Field(default=0.0, ge=0.0)


class PricingConfig(BaseModel):
    """User rate table for the manual bid surface."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    service_types: List[ServiceDefinition] = Field(default_factory=list)
    default_margin: float = Field(default=0.25, ge=0.0, le=1.0)
    labor_burden_rate: float = Field(default=1.0, ge=0.0)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def get_service(self, service_id: str) -> Optional[ServiceDefinition]:
        """Find a service type by id."""
        for service in self.service_types:
            if service.id == service_id:
                return service
        return None


class SiteCatalog(BaseModel):
    """Trades and the services their rules feed."""
    model_config = ConfigDict(frozen=True)

    version: str = "1.0.0"
    trades: List[TradeDefinition] = Field(default_factory=list)
    services: List[ServiceDefinition] = Field(default_factory=list)


class CatalogFile(BaseModel):
    """On-disk JSON catalog layout."""
    pricing_configs: List[PricingConfig] = Field(default_factory=list)
    site_catalog: Optional[SiteCatalog] = None
