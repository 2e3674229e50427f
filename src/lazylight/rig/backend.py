"""Render-pipeline backends that turn descriptors into host light components.

Each backend keeps the canonical descriptor fields untouched and adds its
pipeline-specific settings to ``LightComponent.extras``.  Reading a
component back therefore never depends on which pipeline produced it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from lazylight.rig.descriptor import LightDescriptor, LightKind


@dataclass
class LightComponent:
    """Light attached to a scene node.

    Mirrors the engine's light component: transform lives on the node,
    everything else lives here.
    """
    kind: LightKind = LightKind.POINT
    color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    intensity: float = 1.0
    range: float = 10.0
    spot_angle: float = 0.0
    inner_spot_angle: float = 0.0
    enabled: bool = True
    extras: dict[str, Any] = field(default_factory=dict)


class LightBackend:
    """Base backend: canonical fields only (built-in pipeline)."""

    name = "builtin"

    def to_component(self, descriptor: LightDescriptor) -> LightComponent:
        comp = LightComponent(
            kind=descriptor.kind,
            color=descriptor.color,
            intensity=descriptor.intensity,
            range=descriptor.range,
            spot_angle=descriptor.spot_angle,
            inner_spot_angle=descriptor.inner_spot_angle,
        )
        self.apply_extras(descriptor, comp)
        return comp

    def apply_extras(self, descriptor: LightDescriptor, comp: LightComponent) -> None:
        """Hook for pipeline-specific settings."""

    def to_descriptor(self, comp: LightComponent, position, rotation) -> LightDescriptor:
        return LightDescriptor(
            kind=comp.kind,
            position=position,
            rotation=rotation,
            color=comp.color,
            intensity=comp.intensity,
            range=comp.range,
            spot_angle=comp.spot_angle,
        )


class BuiltinBackend(LightBackend):
    name = "builtin"


class UniversalBackend(LightBackend):
    """URP: area lights can only be baked."""

    name = "urp"

    def apply_extras(self, descriptor: LightDescriptor, comp: LightComponent) -> None:
        if descriptor.kind is LightKind.RECTANGLE:
            comp.extras["lightmap_bake_type"] = "Baked"
        else:
            comp.extras["lightmap_bake_type"] = "Realtime"


class HighDefinitionBackend(LightBackend):
    """HDRP: physical light units.

    Directional lights are expressed in lux, everything else in lumen.
    """

    name = "hdrp"

    # Multipliers from the editor's unitless intensity to physical units
    LUMEN_PER_UNIT = 600.0
    LUX_PER_UNIT = 20000.0 / 6.0
    AREA_SIZE = (1.0, 1.0)

    def apply_extras(self, descriptor: LightDescriptor, comp: LightComponent) -> None:
        if descriptor.kind is LightKind.DIRECTIONAL:
            comp.extras["lux"] = descriptor.intensity * self.LUX_PER_UNIT
            return
        comp.extras["lumen"] = descriptor.intensity * self.LUMEN_PER_UNIT
        if descriptor.kind is LightKind.RECTANGLE:
            comp.extras["area_size"] = self.AREA_SIZE
        elif descriptor.kind is LightKind.SPOT:
            # Lumen spread over the cone gives candela along the axis
            half = math.radians(descriptor.spot_angle) / 2.0
            solid_angle = 2.0 * math.pi * (1.0 - math.cos(half))
            comp.extras["candela"] = comp.extras["lumen"] / solid_angle


_BACKENDS: dict[str, type[LightBackend]] = {
    BuiltinBackend.name: BuiltinBackend,
    UniversalBackend.name: UniversalBackend,
    HighDefinitionBackend.name: HighDefinitionBackend,
}


def get_backend(name: str) -> LightBackend:
    """Instantiate the backend registered under *name*."""
    try:
        return _BACKENDS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown light backend: {name!r} (expected one of {sorted(_BACKENDS)})"
        ) from None


def backend_names() -> list[str]:
    return sorted(_BACKENDS)
