"""Decide whether a scene is already lit well enough."""

from dataclasses import dataclass
from typing import Iterable

from lazylight.constants import SUFFICIENCY_THRESHOLD


@dataclass(frozen=True)
class LightState:
    """Snapshot of an existing light's relevant attributes."""
    enabled: bool = True
    intensity: float = 1.0


def is_sufficiently_lit(lights: Iterable[LightState],
                        threshold: float = SUFFICIENCY_THRESHOLD) -> bool:
    """True iff at least one enabled light is brighter than *threshold*."""
    return any(light.enabled and light.intensity > threshold for light in lights)
