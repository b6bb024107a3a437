"""
Object Classification Store - In-memory repository of classified site objects.

Implements:
- Add / update / remove of classified geometry
- Measurement on create and on every geometry change (no stale measurements)
- Revision counter so callers can tell when derived estimates went stale
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Iterable, List, Optional

from bid_engines.site_objects.measurement import GeometryMeasurementError, GeometryMeasurementPort
from bid_engines.site_objects.models import (
    GeometricObject,
    ObjectMeasurements,
    ObjectSource,
    SiteObjectType,
)

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {"object_type", "sub_type", "geometry", "source", "confidence", "label", "tags"}


class ObjectNotFoundError(KeyError):
    """No object with the given id exists in the store."""


class ObjectClassificationStore:
    """Append/update/remove repository of classified geometric objects."""

    def __init__(
        self,
        measurement_port: GeometryMeasurementPort,
        objects: Optional[Iterable[GeometricObject]] = None,
    ):
        self._port = measurement_port
        self._objects: Dict[str, GeometricObject] = {}
        self._revision = 0
        for obj in objects or []:
            self._objects[obj.id] = obj.model_copy(update={"measurements": self._measure(obj.geometry)})

    @property
    def revision(self) -> int:
        """Incremented by every mutation."""
        return self._revision

    def __len__(self) -> int:
        return len(self._objects)

    def list(self) -> List[GeometricObject]:
        """Objects in insertion order."""
        return list(self._objects.values())

    def get(self, object_id: str) -> GeometricObject:
        try:
            return self._objects[object_id]
        except KeyError:
            raise ObjectNotFoundError(object_id) from None

    def add(
        self,
        object_type: SiteObjectType,
        geometry: Dict[str, Any],
        sub_type: Optional[str] = None,
        source: ObjectSource = ObjectSource.MANUAL,
        confidence: Optional[float] = None,
        label: Optional[str] = None,
        tags: Optional[List[str]] = None,
        object_id: Optional[str] = None,
    ) -> GeometricObject:
        """Classify a geometry and store it with fresh measurements."""
        obj = GeometricObject(
            id=object_id or f"obj_{uuid.uuid4().hex[:12]}",
            object_type=object_type,
            sub_type=sub_type,
            geometry=geometry,
            measurements=self._measure(geometry),
            source=source,
            confidence=confidence,
            label=label,
            tags=list(tags or []),
        )
        if obj.id in self._objects:
            raise ValueError(f"Object '{obj.id}' already exists")
        self._objects[obj.id] = obj
        self._touch()
        return obj

    def update(self, object_id: str, **changes: Any) -> GeometricObject:
        """
        Replace fields on an object.

        Measurements cannot be set directly; they are recomputed whenever
        geometry is part of the change.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        current = self.get(object_id)
        if "geometry" in changes:
            changes["measurements"] = self._measure(changes["geometry"])

        # Validate through the model rather than model_copy so enum/str coercion applies
        updated = GeometricObject.model_validate({**current.model_dump(), **changes})
        self._objects[object_id] = updated
        self._touch()
        return updated

    def update_geometry(self, object_id: str, geometry: Dict[str, Any]) -> GeometricObject:
        return self.update(object_id, geometry=geometry)

    def remove(self, object_id: str) -> GeometricObject:
        obj = self.get(object_id)
        del self._objects[object_id]
        self._touch()
        return obj

    def clear(self) -> None:
        self._objects.clear()
        self._touch()

    def _touch(self) -> None:
        self._revision += 1

    def _measure(self, geometry: Dict[str, Any]) -> ObjectMeasurements:
        try:
            return self._port.measure(geometry)
        except GeometryMeasurementError as exc:
            # Unmeasurable geometry contributes nothing downstream
            logger.warning("Geometry could not be measured (%s): %s", geometry.get("type"), exc)
            return ObjectMeasurements()
