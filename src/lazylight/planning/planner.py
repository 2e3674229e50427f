"""Light placement planner: sufficiency check, bounds, sampling, synthesis.

The planner only reads from the host.  It returns a ``PlanResult`` and
leaves creating the lights to the caller.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

import numpy as np

from lazylight.constants import ADVANCED_MAX_LIGHTS, ADVANCED_MIN_LIGHTS
from lazylight.core.host import SceneHost
from lazylight.core.math_utils import Vec3, clamp
from lazylight.planning.bounds import BoundingBox, aggregate_bounds
from lazylight.planning.sampler import (
    project_to_ceiling, sample_ceiling_points, sample_disk_packing, simple_light_count,
)
from lazylight.planning.settings import PlacementMode, PlannerSettings
from lazylight.planning.sufficiency import is_sufficiently_lit
from lazylight.planning.synthesis import DescriptorSynthesizer
from lazylight.rig.descriptor import LightDescriptor
from lazylight.rig.presets import LightingPreset

logger = logging.getLogger(__name__)


class PlanStatus(Enum):
    PLANNED = auto()
    ALREADY_LIT = auto()
    NO_GEOMETRY = auto()
    NO_PLACEMENT = auto()


@dataclass
class PlanResult:
    status: PlanStatus
    bounds: BoundingBox = field(default_factory=BoundingBox.zero)
    descriptors: list[LightDescriptor] = field(default_factory=list)
    requested: int = 0

    @property
    def undersupplied(self) -> bool:
        return self.status is PlanStatus.PLANNED and len(self.descriptors) < self.requested


class LightPlanner:
    """Plans a rig of lights for the scene exposed by a ``SceneHost``."""

    def __init__(self, settings: Optional[PlannerSettings] = None,
                 preset: Optional[LightingPreset] = None,
                 rng: Optional[np.random.Generator] = None):
        self.settings = settings or PlannerSettings()
        self.preset = preset
        self.rng = rng if rng is not None else np.random.default_rng(self.settings.seed)
        self.synthesizer = DescriptorSynthesizer(self.settings, preset)

    def plan(self, host: SceneHost, force: bool = False) -> PlanResult:
        """Plan lights for *host*.

        With *force* the sufficiency check is skipped (re-plan of an
        existing rig).
        """
        s = self.settings
        if not force and is_sufficiently_lit(host.list_lights(), s.sufficiency_threshold):
            logger.info("Scene already has sufficient lighting.")
            return PlanResult(PlanStatus.ALREADY_LIT)

        bounds = aggregate_bounds(host.list_renderable_bounds(s.hero_objects or None))
        if bounds.is_degenerate:
            logger.warning("No renderable geometry found; nothing to light.")
            return PlanResult(PlanStatus.NO_GEOMETRY)

        if s.mode is PlacementMode.ADVANCED:
            requested = int(clamp(s.light_count, ADVANCED_MIN_LIGHTS, ADVANCED_MAX_LIGHTS))
            points = self._advanced_points(bounds, requested)
        else:
            requested = simple_light_count(bounds)
            points = self._simple_points(host, bounds, requested)

        if not points:
            logger.warning("Could not place any lights; leaving the scene unchanged.")
            return PlanResult(PlanStatus.NO_PLACEMENT, bounds, requested=requested)

        descriptors = [self.synthesizer.synthesize(self.rng, p, bounds) for p in points]
        result = PlanResult(PlanStatus.PLANNED, bounds, descriptors, requested)
        if result.undersupplied:
            logger.info("Placed %d of %d requested lights.", len(descriptors), requested)
        logger.debug("Planned %d lights in bounds %s-%s", len(descriptors), bounds.min, bounds.max)
        return result

    def placement_radius(self, bounds: BoundingBox) -> float:
        if self.settings.radius is not None:
            return self.settings.radius
        size = bounds.size
        return max(size[0], size[2]) / 2.0

    def _simple_points(self, host: SceneHost, bounds: BoundingBox, count: int) -> list[Vec3]:
        s = self.settings
        points = sample_ceiling_points(self.rng, bounds, count,
                                       s.extent_fraction, s.height_fraction)
        if s.project_to_ceiling:
            points = project_to_ceiling(points, bounds, host.raycast_down,
                                        s.probe_height, s.surface_offset)
        return points

    def _advanced_points(self, bounds: BoundingBox, count: int) -> list[Vec3]:
        s = self.settings
        lo = np.array(bounds.min)
        hi = np.array(bounds.max) + (0.0, s.surface_offset, 0.0)

        # Candidates outside the bounds are pulled back onto them
        return sample_disk_packing(
            self.rng, bounds.center, self.placement_radius(bounds), count,
            s.min_spacing_factor, s.attempts_per_point,
            project=lambda p: np.clip(p, lo, hi),
        )
