"""Site Objects module - classified geometry and its measurements."""

from bid_engines.site_objects.measurement import GeometryMeasurementError, GeometryMeasurementPort
from bid_engines.site_objects.models import (
    GeometricObject,
    ObjectMeasurements,
    ObjectSource,
    SiteObjectType,
)
from bid_engines.site_objects.store import ObjectClassificationStore, ObjectNotFoundError

__all__ = [
    "GeometricObject",
    "GeometryMeasurementError",
    "GeometryMeasurementPort",
    "ObjectClassificationStore",
    "ObjectMeasurements",
    "ObjectNotFoundError",
    "ObjectSource",
    "SiteObjectType",
]
