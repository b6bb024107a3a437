"""Runtime configuration helpers for bid engines."""
from __future__ import annotations

import logging
import os
from typing import Optional

DEFAULT_QUANTITY_EPSILON = 1e-6

logger = logging.getLogger(__name__)


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def get_env() -> str:
    return _get_env("ENV") or _get_env("APP_ENV") or "dev"


def get_log_level() -> str:
    return (_get_env("BID_ENGINES_LOG_LEVEL") or "INFO").upper()


def get_pricing_catalog_path() -> Optional[str]:
    """Optional JSON catalog replacing the built-in rate tables."""
    return _get_env("BID_ENGINES_PRICING_CATALOG") or None


def get_quantity_epsilon() -> float:
    """Aggregated quantities at or below this magnitude are treated as zero."""
    raw = _get_env("BID_ENGINES_QUANTITY_EPSILON")
    if not raw:
        return DEFAULT_QUANTITY_EPSILON
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric BID_ENGINES_QUANTITY_EPSILON=%r", raw)
        return DEFAULT_QUANTITY_EPSILON
    if value < 0:
        logger.warning("Ignoring negative BID_ENGINES_QUANTITY_EPSILON=%r", raw)
        return DEFAULT_QUANTITY_EPSILON
    return value
