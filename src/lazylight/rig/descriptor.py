"""Immutable light descriptor records emitted by the planner."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from lazylight.constants import INNER_SPOT_RATIO


class LightKind(Enum):
    POINT = "Point"
    SPOT = "Spot"
    DIRECTIONAL = "Directional"
    RECTANGLE = "Rectangle"

    @classmethod
    def from_name(cls, name: str) -> LightKind:
        """Look up a kind by display name ("Spot") or member name ("SPOT")."""
        for kind in cls:
            if name == kind.value or name.upper() == kind.name:
                return kind
        raise ValueError(f"Unknown light kind: {name!r}")


@dataclass(frozen=True)
class LightDescriptor:
    """A light to be created by the host.

    Attributes
    ----------
    kind : LightKind
        Point, Spot, Directional or Rectangle.
    position : tuple
        World-space (x, y, z).
    rotation : tuple
        Unit quaternion (x, y, z, w).  Lights shine along local +Z.
    color : tuple
        RGB colour (0..1).
    intensity : float
        Brightness multiplier, strictly positive.
    range : float
        Falloff distance, zero for directional lights.
    spot_angle : float
        Outer cone angle in degrees, in (0, 180) for spot lights and 0 otherwise.
    """
    kind: LightKind
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 1.0)
    color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    intensity: float = 1.0
    range: float = 10.0
    spot_angle: float = 0.0

    def __post_init__(self):
        # Coerce numpy scalars/arrays into plain floats so records compare
        # and serialize cleanly.
        object.__setattr__(self, "position", _floats(self.position, 3, "position"))
        object.__setattr__(self, "rotation", _floats(self.rotation, 4, "rotation"))
        object.__setattr__(self, "color", _floats(self.color, 3, "color"))
        object.__setattr__(self, "intensity", float(self.intensity))
        object.__setattr__(self, "range", float(self.range))
        object.__setattr__(self, "spot_angle", float(self.spot_angle))

        if not isinstance(self.kind, LightKind):
            raise ValueError(f"kind must be a LightKind, got {self.kind!r}")
        if not self.intensity > 0.0:
            raise ValueError(f"intensity must be > 0, got {self.intensity}")
        if self.range < 0.0:
            raise ValueError(f"range must be >= 0, got {self.range}")
        if self.kind is LightKind.SPOT and not 0.0 < self.spot_angle < 180.0:
            raise ValueError(f"spot_angle must be in (0, 180), got {self.spot_angle}")
        norm = math.sqrt(sum(c * c for c in self.rotation))
        if abs(norm - 1.0) > 1e-3:
            raise ValueError(f"rotation must be a unit quaternion, got {self.rotation}")

    @property
    def inner_spot_angle(self) -> float:
        return self.spot_angle * INNER_SPOT_RATIO


def _floats(values, n: int, field_name: str) -> tuple:
    out = tuple(float(v) for v in values)
    if len(out) != n:
        raise ValueError(f"{field_name} must have {n} components, got {len(out)}")
    return out
