"""Serializable scene description used by the command-line front end.

Data-only module: a JSON scene file lists renderers (world bounds), light
groups and lights.  ``build_scene`` turns it into an in-memory ``Scene``
host and ``from_scene`` captures a host back into a description.

Example::

    {
      "renderers": [
        {"name": "floor", "bounds": {"min": [0, 0, 0], "max": [10, 0.1, 10]}}
      ],
      "groups": [{"name": "LazyGeneratedLights", "tag": "LazyLight"}],
      "lights": [
        {"name": "Sun", "type": "Directional", "intensity": 1.0,
         "enabled": true, "position": [0, 5, 0]}
      ]
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from lazylight.core.config_loader import load_json, save_json
from lazylight.core.scene_graph import Scene, SceneNode
from lazylight.planning.bounds import BoundingBox
from lazylight.rig.backend import LightBackend
from lazylight.rig.serialization import descriptor_from_dict, descriptor_to_dict


@dataclass
class RendererEntry:
    name: str
    bounds: BoundingBox
    tag: Optional[str] = None

    def to_dict(self) -> dict:
        d = {"name": self.name, "bounds": self.bounds.to_dict()}
        if self.tag is not None:
            d["tag"] = self.tag
        return d

    @classmethod
    def from_dict(cls, d: dict) -> RendererEntry:
        return cls(name=d["name"], bounds=BoundingBox.from_dict(d["bounds"]), tag=d.get("tag"))


@dataclass
class SceneDescription:
    """Renderers, light groups and lights of a scene.

    Light entries use the rig record layout plus ``name``, ``enabled``,
    ``tag`` and ``parent`` (a group name).  Missing light fields fall back
    to a white, unrotated point light.
    """

    renderers: list[RendererEntry] = field(default_factory=list)
    groups: list[dict] = field(default_factory=list)
    lights: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "renderers": [r.to_dict() for r in self.renderers],
            "groups": [dict(g) for g in self.groups],
            "lights": [dict(light) for light in self.lights],
        }

    @classmethod
    def from_dict(cls, d: dict) -> SceneDescription:
        return cls(
            renderers=[RendererEntry.from_dict(r) for r in d.get("renderers", [])],
            groups=[dict(g) for g in d.get("groups", [])],
            lights=[dict(light) for light in d.get("lights", [])],
        )

    def build_scene(self, backend: Optional[LightBackend] = None) -> Scene:
        """Create an in-memory scene host from this description."""
        scene = Scene(backend=backend)
        for r in self.renderers:
            scene.add_renderer(r.name, r.bounds, tag=r.tag)

        groups: dict[str, SceneNode] = {}
        for g in self.groups:
            groups[g["name"]] = scene.create_group(g["name"], tag=g.get("tag"))

        for entry in self.lights:
            descriptor = descriptor_from_dict({
                "type": entry.get("type", "Point"),
                "color": entry.get("color", [1.0, 1.0, 1.0, 1.0]),
                "intensity": entry.get("intensity", 1.0),
                "range": entry.get("range", 10.0),
                "position": entry.get("position", [0.0, 0.0, 0.0]),
                "rotation": entry.get("rotation", [0.0, 0.0, 0.0, 1.0]),
                "spotAngle": entry.get("spotAngle", 0.0),
            })
            parent = groups.get(entry.get("parent"))
            node = scene.create_light(descriptor, parent=parent, tag=entry.get("tag"),
                                      name=entry.get("name"))
            node.light.enabled = bool(entry.get("enabled", True))
        return scene

    @classmethod
    def from_scene(cls, scene: Scene) -> SceneDescription:
        """Capture renderers, groups and lights currently in *scene*."""
        desc = cls()

        def _visit(node: SceneNode):
            if node is scene:
                return
            if node.bounds is not None:
                desc.renderers.append(RendererEntry(node.name, node.bounds, node.tag))
            elif node.light is not None:
                descriptor = scene.backend.to_descriptor(
                    node.light, tuple(node.position), tuple(node.quaternion))
                entry = {"name": node.name, "enabled": node.light.enabled}
                entry.update(descriptor_to_dict(descriptor))
                if node.tag is not None:
                    entry["tag"] = node.tag
                if node.parent is not None and node.parent is not scene:
                    entry["parent"] = node.parent.name
                desc.lights.append(entry)
            else:
                group = {"name": node.name}
                if node.tag is not None:
                    group["tag"] = node.tag
                desc.groups.append(group)

        scene.traverse(_visit)
        return desc


def load_scene(path: Path, backend: Optional[LightBackend] = None) -> Scene:
    return SceneDescription.from_dict(load_json(path)).build_scene(backend)


def save_scene(scene: Scene, path: Path) -> None:
    save_json(Path(path), SceneDescription.from_scene(scene).to_dict())
