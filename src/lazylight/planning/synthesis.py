"""Turn accepted placement points into light descriptors."""

import colorsys
from typing import Optional

import numpy as np

from lazylight.constants import HSV_SATURATION_RANGE, HSV_VALUE_RANGE, WARM_JITTER, WARM_PALETTE
from lazylight.core.math_utils import (
    DOWN, Quat, Vec3, deg_to_rad, normalize, quat_from_euler, quat_identity,
    quat_look_rotation,
)
from lazylight.planning.bounds import BoundingBox
from lazylight.planning.settings import PlannerSettings
from lazylight.rig.descriptor import LightDescriptor, LightKind
from lazylight.rig.presets import LightingPreset


def aim_at(position: Vec3, target: Vec3) -> Quat:
    """Rotation pointing local +Z from *position* toward *target*."""
    direction = normalize(np.asarray(target, dtype=np.float64) - position)
    if np.linalg.norm(direction) < 1e-10:
        direction = DOWN
    return quat_look_rotation(direction)


class DescriptorSynthesizer:
    """Draws descriptor parameters from *settings*, or takes them from *preset*.

    Parameters
    ----------
    settings : PlannerSettings
        Ranges and colour mode for unconstrained draws.
    preset : LightingPreset, optional
        Fixes kind, colour, intensity, base range and spot angle.
    """

    def __init__(self, settings: PlannerSettings, preset: Optional[LightingPreset] = None):
        self.settings = settings
        self.preset = preset

    def synthesize(self, rng: np.random.Generator, point: Vec3,
                   bounds: BoundingBox) -> LightDescriptor:
        s = self.settings
        position = np.asarray(point, dtype=np.float64)
        kind = self._pick_kind(rng)
        color = self._pick_color(rng)
        intensity = self.preset.intensity if self.preset else rng.uniform(*s.intensity_range)

        if kind is LightKind.DIRECTIONAL:
            light_range = 0.0
        else:
            size = bounds.size
            base = self.preset.range if self.preset else max(size[0], size[2])
            light_range = base * rng.uniform(*s.range_scale)

        spot_angle = 0.0
        if kind is LightKind.SPOT:
            spot_angle = self.preset.angle if self.preset else rng.uniform(*s.spot_angle_range)
            rotation = aim_at(position, bounds.center)
        elif kind is LightKind.DIRECTIONAL:
            elevation = rng.uniform(*s.elevation_range)
            azimuth = rng.uniform(*s.azimuth_range)
            rotation = quat_from_euler(deg_to_rad(elevation), deg_to_rad(azimuth), 0.0, "YXZ")
        else:
            rotation = quat_identity()

        return LightDescriptor(
            kind=kind,
            position=tuple(position),
            rotation=tuple(rotation),
            color=color,
            intensity=intensity,
            range=light_range,
            spot_angle=spot_angle,
        )

    def _pick_kind(self, rng: np.random.Generator) -> LightKind:
        if self.preset is not None:
            return self.preset.kind
        kinds = self.settings.kinds
        return kinds[int(rng.integers(len(kinds)))]

    def _pick_color(self, rng: np.random.Generator) -> tuple[float, float, float]:
        if self.preset is not None:
            return self.preset.color
        if self.settings.color_mode == "warm":
            base = np.array(WARM_PALETTE[int(rng.integers(len(WARM_PALETTE)))])
            jitter = rng.uniform(-WARM_JITTER, WARM_JITTER, size=3)
            return tuple(float(c) for c in np.clip(base + jitter, 0.0, 1.0))
        h = rng.random()
        sat = rng.uniform(*HSV_SATURATION_RANGE)
        val = rng.uniform(*HSV_VALUE_RANGE)
        return colorsys.hsv_to_rgb(h, sat, val)
