"""In-memory scene graph that plays the role of the engine host.

Nodes carry an optional renderer bounds box (world-space AABB) and an
optional light component.  ``Scene`` implements the ``SceneHost`` queries
and mutations the planner and the rig commands rely on.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from lazylight.core.math_utils import Quat, Vec3, quat_identity, vec3
from lazylight.planning.bounds import BoundingBox
from lazylight.planning.sufficiency import LightState
from lazylight.rig.backend import BuiltinBackend, LightBackend, LightComponent
from lazylight.rig.descriptor import LightDescriptor

logger = logging.getLogger(__name__)


class SceneNode:
    """A node in the scene graph hierarchy.

    Transforms are world-space: generated rigs are flat, so a node's
    position and quaternion are used as-is.
    """

    def __init__(self, name: str = "", tag: Optional[str] = None):
        self.name = name
        self.tag = tag
        self.parent: Optional["SceneNode"] = None
        self.children: list["SceneNode"] = []

        # Transform
        self.position: Vec3 = vec3()
        self.quaternion: Quat = quat_identity()

        # Inactive nodes (and their subtrees) are invisible to queries
        self.active: bool = True

        # Optional renderer bounds and light attached to this node
        self.bounds: Optional[BoundingBox] = None
        self.light: Optional[LightComponent] = None

    def add(self, child: "SceneNode") -> "SceneNode":
        """Add a child node. Removes from previous parent if any."""
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        return self

    def remove(self, child: "SceneNode") -> "SceneNode":
        """Remove a child node."""
        if child in self.children:
            self.children.remove(child)
            child.parent = None
        return self

    def set_position(self, x: float, y: float, z: float) -> "SceneNode":
        self.position = vec3(x, y, z)
        return self

    def set_quaternion(self, q: Quat) -> "SceneNode":
        self.quaternion = np.asarray(q, dtype=np.float64).copy()
        return self

    def traverse(self, callback) -> None:
        """Visit this node and all descendants depth-first."""
        callback(self)
        for child in self.children:
            child.traverse(callback)

    def traverse_active(self, callback) -> None:
        """Visit only active nodes depth-first."""
        if not self.active:
            return
        callback(self)
        for child in self.children:
            child.traverse_active(callback)

    def find(self, name: str) -> Optional["SceneNode"]:
        """Find first descendant with given name."""
        if self.name == name:
            return self
        for child in self.children:
            found = child.find(name)
            if found is not None:
                return found
        return None

    def find_all_tagged(self, tag: str) -> list["SceneNode"]:
        """Find all descendants carrying *tag*, parents before children."""
        results = []
        if self.tag == tag:
            results.append(self)
        for child in self.children:
            results.extend(child.find_all_tagged(tag))
        return results

    def is_descendant_of(self, other: "SceneNode") -> bool:
        node = self.parent
        while node is not None:
            if node is other:
                return True
            node = node.parent
        return False


class Scene(SceneNode):
    """Root scene node and in-memory scene host."""

    def __init__(self, backend: Optional[LightBackend] = None):
        super().__init__(name="scene")
        self.backend: LightBackend = backend or BuiltinBackend()

    # ── Authoring helpers ─────────────────────────────────────────

    def add_renderer(self, name: str, bounds: BoundingBox,
                     parent: Optional[SceneNode] = None,
                     tag: Optional[str] = None) -> SceneNode:
        node = SceneNode(name, tag=tag)
        node.bounds = bounds
        c = bounds.center
        node.set_position(c[0], c[1], c[2])
        (parent or self).add(node)
        return node

    def add_light(self, name: str, component: LightComponent,
                  position=(0.0, 0.0, 0.0), parent: Optional[SceneNode] = None,
                  tag: Optional[str] = None) -> SceneNode:
        node = SceneNode(name, tag=tag)
        node.light = component
        node.set_position(*position)
        (parent or self).add(node)
        return node

    # ── Queries ───────────────────────────────────────────────────

    def collect_renderers(self) -> list[SceneNode]:
        result = []

        def _collect(node: SceneNode):
            if node.bounds is not None:
                result.append(node)

        self.traverse_active(_collect)
        return result

    def list_renderable_bounds(self, names: Optional[Sequence[str]] = None) -> list[BoundingBox]:
        """World bounds of active renderers, optionally restricted to *names*."""
        wanted = set(names) if names else None
        return [
            node.bounds for node in self.collect_renderers()
            if wanted is None or node.name in wanted
        ]

    def list_lights(self) -> list[LightState]:
        result = []

        def _collect(node: SceneNode):
            if node.light is not None:
                result.append(LightState(enabled=node.light.enabled,
                                         intensity=node.light.intensity))

        self.traverse_active(_collect)
        return result

    def find_objects_by_tag(self, tag: str) -> list[SceneNode]:
        return [n for n in self.find_all_tagged(tag) if n is not self]

    def raycast_down(self, origin, max_distance: float) -> Optional[tuple[float, float, float]]:
        """Cast a vertical ray down from *origin* against renderer bounds.

        Returns the hit point on the highest top face within *max_distance*,
        or None.
        """
        ox, oy, oz = (float(v) for v in origin)
        best: Optional[float] = None
        for node in self.collect_renderers():
            b = node.bounds
            if not b.contains_footprint((ox, oy, oz)):
                continue
            top = b.max[1]
            if top > oy:
                # Origin is inside or below this box; the ray starts past its top
                continue
            if oy - top > max_distance:
                continue
            if best is None or top > best:
                best = top
        if best is None:
            return None
        return (ox, best, oz)

    def light_descriptors(self, tag: str) -> list[LightDescriptor]:
        """Read tagged lights back as descriptors, in scene order."""
        return [
            self.backend.to_descriptor(node.light, tuple(node.position), tuple(node.quaternion))
            for node in self.find_objects_by_tag(tag)
            if node.light is not None
        ]

    # ── Mutations ─────────────────────────────────────────────────

    def create_group(self, name: str, tag: Optional[str] = None) -> SceneNode:
        node = SceneNode(name, tag=tag)
        self.add(node)
        return node

    def create_light(self, descriptor: LightDescriptor, parent: Optional[SceneNode] = None,
                     tag: Optional[str] = None, name: Optional[str] = None) -> SceneNode:
        node = SceneNode(name or f"{descriptor.kind.value}Light", tag=tag)
        node.light = self.backend.to_component(descriptor)
        node.set_position(*descriptor.position)
        node.set_quaternion(descriptor.rotation)
        (parent or self).add(node)
        return node

    def destroy_object(self, ref: SceneNode) -> None:
        """Detach *ref* and its subtree. Already-detached nodes are ignored."""
        if ref is self:
            raise ValueError("Cannot destroy the scene root")
        if not ref.is_descendant_of(self):
            logger.debug("Skipping destroy of detached node %s", ref.name)
            return
        ref.parent.remove(ref)
