"""Contract for the external geometry measurement service."""
from __future__ import annotations

from typing import Any, Dict, Protocol

from bid_engines.site_objects.models import ObjectMeasurements


class GeometryMeasurementError(ValueError):
    """Raised by a measurement port when a geometry cannot be measured."""


class GeometryMeasurementPort(Protocol):
    """Measures a geometry: polygons yield area and perimeter, lines length, points a count."""

    def measure(self, geometry: Dict[str, Any]) -> ObjectMeasurements: ...
