"""Planner settings with JSON overrides."""

import logging
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Optional

from lazylight import constants as C
from lazylight.core.config_loader import load_json
from lazylight.rig.descriptor import LightKind

logger = logging.getLogger(__name__)


class PlacementMode(Enum):
    SIMPLE = "simple"
    ADVANCED = "advanced"


COLOR_MODES = ("hsv", "warm")


@dataclass
class PlannerSettings:
    """Tunable parameters for one planning run."""
    mode: PlacementMode = PlacementMode.SIMPLE

    # Advanced mode: requested light count (1-10) and sphere radius.
    # A radius of None means half the larger horizontal extent.
    light_count: int = 3
    radius: Optional[float] = None

    # Restrict bounds to these renderer names (hero objects)
    hero_objects: list[str] = field(default_factory=list)
    preset_name: Optional[str] = None
    seed: Optional[int] = None

    sufficiency_threshold: float = C.SUFFICIENCY_THRESHOLD
    min_spacing_factor: float = C.MIN_SPACING_FACTOR
    attempts_per_point: int = C.ATTEMPTS_PER_POINT

    extent_fraction: float = C.EXTENT_FRACTION
    height_fraction: float = C.HEIGHT_FRACTION
    project_to_ceiling: bool = True
    probe_height: float = C.PROBE_HEIGHT
    surface_offset: float = C.SURFACE_OFFSET

    kinds: tuple[LightKind, ...] = (LightKind.POINT, LightKind.SPOT)
    color_mode: str = "hsv"
    intensity_range: tuple[float, float] = C.INTENSITY_RANGE
    range_scale: tuple[float, float] = C.RANGE_SCALE
    spot_angle_range: tuple[float, float] = C.SPOT_ANGLE_RANGE
    elevation_range: tuple[float, float] = C.ELEVATION_RANGE
    azimuth_range: tuple[float, float] = C.AZIMUTH_RANGE

    def __post_init__(self):
        if isinstance(self.mode, str):
            self.mode = PlacementMode(self.mode.lower())
        self.kinds = tuple(
            k if isinstance(k, LightKind) else LightKind.from_name(k) for k in self.kinds
        )
        if not self.kinds:
            raise ValueError("At least one light kind is required")
        if self.color_mode not in COLOR_MODES:
            raise ValueError(f"Unknown color mode: {self.color_mode!r}")
        lo, hi = self.intensity_range
        if lo <= 0 or hi < lo:
            raise ValueError(f"Invalid intensity range: {self.intensity_range}")
        lo, hi = self.spot_angle_range
        if lo <= 0 or hi >= 180 or hi < lo:
            raise ValueError(f"Invalid spot angle range: {self.spot_angle_range}")
        if self.radius is not None and self.radius <= 0:
            raise ValueError(f"radius must be > 0, got {self.radius}")
        for name in ("intensity_range", "range_scale", "spot_angle_range",
                     "elevation_range", "azimuth_range"):
            setattr(self, name, tuple(float(v) for v in getattr(self, name)))
        self.hero_objects = list(self.hero_objects)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["mode"] = self.mode.value
        d["kinds"] = [k.value for k in self.kinds]
        for name in ("intensity_range", "range_scale", "spot_angle_range",
                     "elevation_range", "azimuth_range"):
            d[name] = list(d[name])
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "PlannerSettings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            logger.warning("Ignoring unknown planner settings: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in d.items() if k in known})


def load_settings(path: Path) -> PlannerSettings:
    """Load settings from a JSON file."""
    return PlannerSettings.from_dict(load_json(path))
