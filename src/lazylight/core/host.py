"""Interfaces between the planner and the scene host that owns the objects.

The planner only ever reads a snapshot through the query half and issues a
bounded sequence of create/destroy calls through the mutation half.
``lazylight.core.scene_graph.Scene`` is the in-memory implementation.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from lazylight.planning.bounds import BoundingBox
from lazylight.planning.sufficiency import LightState
from lazylight.rig.descriptor import LightDescriptor

ObjectRef = Any
Point3 = tuple[float, float, float]


class SceneHost(Protocol):

    # Queries

    def list_renderable_bounds(self, names: Optional[Sequence[str]] = None) -> list[BoundingBox]:
        ...

    def list_lights(self) -> list[LightState]:
        ...

    def find_objects_by_tag(self, tag: str) -> list[ObjectRef]:
        ...

    def raycast_down(self, origin: Point3, max_distance: float) -> Optional[Point3]:
        ...

    def light_descriptors(self, tag: str) -> list[LightDescriptor]:
        ...

    # Mutations

    def create_group(self, name: str, tag: Optional[str] = None) -> ObjectRef:
        ...

    def create_light(self, descriptor: LightDescriptor, parent: Optional[ObjectRef] = None,
                     tag: Optional[str] = None, name: Optional[str] = None) -> ObjectRef:
        ...

    def destroy_object(self, ref: ObjectRef) -> None:
        ...
