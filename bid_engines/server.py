"""Aggregate FastAPI app for the bid engines."""
from __future__ import annotations

import logging

from fastapi import FastAPI

from bid_engines.bid_pricing.routes import router as bid_pricing_router
from bid_engines.config.runtime_config import get_env, get_log_level
from bid_engines.pricing_catalog.routes import router as pricing_catalog_router
from bid_engines.service_costing.routes import router as service_costing_router
from bid_engines.trade_estimates.routes import router as trade_estimates_router


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting bid engines (env=%s)", get_env())
    app = FastAPI(title="Site Bid Engines", version="0.1.0")
    app.include_router(pricing_catalog_router)
    app.include_router(service_costing_router)
    app.include_router(trade_estimates_router)
    app.include_router(bid_pricing_router)

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
