"""
FastAPI routes for single-service costing.

POST /service-costs/calculate
- Input: quantity plus either an inline service or a service_id from a pricing config
- Output: CostBreakdown (minimum charge not applied)
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from bid_engines.common.error_envelope import error_response, not_found_error
from bid_engines.pricing_catalog.catalog import DEFAULT_CONFIG_ID, get_catalog_registry
from bid_engines.pricing_catalog.models import ServiceDefinition
from bid_engines.service_costing.calculator import calculate
from bid_engines.service_costing.models import CostBreakdown

router = APIRouter(prefix="/service-costs", tags=["service_costing"])


class CalculateCostRequest(BaseModel):
    quantity: float = Field(..., ge=0.0, description="Units of work; negative quantities are rejected")
    service: Optional[ServiceDefinition] = Field(default=None, description="Inline service definition")
    service_id: Optional[str] = Field(default=None, description="Service id within config_id")
    config_id: str = Field(default=DEFAULT_CONFIG_ID, description="Pricing config supplying service and burden")


@router.post("/calculate", response_model=CostBreakdown)
def calculate_service_cost(request: CalculateCostRequest) -> CostBreakdown:
    if request.service is not None:
        return calculate(request.service, request.quantity)

    if not request.service_id:
        error_response(
            "service_costing.missing_service",
            "Either service or service_id is required",
            status_code=422,
            resource_kind="service",
        )

    config = get_catalog_registry().get(request.config_id)
    if config is None:
        not_found_error("pricing_config", request.config_id)
    service = config.get_service(request.service_id)
    if service is None:
        not_found_error("service", request.service_id)
    return calculate(service, request.quantity, labor_burden_rate=config.labor_burden_rate)
