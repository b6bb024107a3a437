"""
Site Object Models - Classified geometric objects and their measurements.

Defines:
- SiteObjectType: Closed set of site features a drawing can be classified as
- ObjectMeasurements: Pre-computed area/perimeter/length/count
- GeometricObject: Classified geometry owned by the object store
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SiteObjectType(str, Enum):
    """Site feature classifications."""
    # Surfaces
    PARKING_SURFACE = "parking-surface"
    DRIVE_LANE = "drive-lane"
    LOADING_AREA = "loading-area"
    SIDEWALK = "sidewalk"
    PLAZA = "plaza"
    # Linear features
    CURB = "curb"
    GUTTER = "gutter"
    EDGE_LINE = "edge-line"
    CRACK = "crack"
    # Point features
    DRAIN = "drain"
    BOLLARD = "bollard"
    LIGHT_POLE = "light-pole"
    SIGN = "sign"
    # Structures
    BUILDING_FOOTPRINT = "building-footprint"
    MEDIAN = "median"
    ISLAND = "island"
    # ADA / markings
    ADA_RAMP = "ada-ramp"
    ADA_SPACE = "ada-space"
    FIRE_LANE = "fire-lane"
    CROSSWALK = "crosswalk"
    # Striping
    PARKING_STALL = "parking-stall"
    STALL_GROUP = "stall-group"
    DIRECTIONAL_ARROW = "directional-arrow"
    SYMBOL = "symbol"


class ObjectSource(str, Enum):
    """Where a classified object came from."""
    MANUAL = "manual"
    AI_SUGGESTED = "ai-suggested"
    AI_DETECTED = "ai-detected"
    IMPORTED = "imported"


class ObjectMeasurements(BaseModel):
    """Measurements in imperial units (ft², ft, each)."""
    model_config = ConfigDict(frozen=True)

    area: Optional[float] = None
    perimeter: Optional[float] = None
    length: Optional[float] = None
    count: Optional[float] = None

    def read(self, field: str) -> float:
        """Read a measurement field; missing values read as 0."""
        value = getattr(self, field, None)
        return float(value) if value is not None else 0.0


class GeometricObject(BaseModel):
    """A classified drawing. Only the store creates or mutates these."""
    model_config = ConfigDict(frozen=True)

    id: str
    object_type: SiteObjectType
    sub_type: Optional[str] = None
    geometry: Dict[str, Any]  # GeoJSON-style geometry, opaque to the engine
    measurements: ObjectMeasurements = Field(default_factory=ObjectMeasurements)
    source: ObjectSource = ObjectSource.MANUAL
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    label: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
