"""Axis-aligned bounding boxes and scene bounds aggregation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from lazylight.core.math_utils import Vec3


@dataclass(frozen=True)
class BoundingBox:
    """World-space axis-aligned box given by its min and max corners."""
    min: tuple[float, float, float] = (0.0, 0.0, 0.0)
    max: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self):
        lo = tuple(float(v) for v in self.min)
        hi = tuple(float(v) for v in self.max)
        if len(lo) != 3 or len(hi) != 3:
            raise ValueError("BoundingBox corners must have three components")
        if any(a > b for a, b in zip(lo, hi)):
            raise ValueError(f"BoundingBox min {lo} exceeds max {hi}")
        object.__setattr__(self, "min", lo)
        object.__setattr__(self, "max", hi)

    @staticmethod
    def zero() -> BoundingBox:
        """Degenerate box at the origin ("nothing to light")."""
        return BoundingBox()

    @property
    def center(self) -> Vec3:
        return (np.array(self.min) + np.array(self.max)) / 2.0

    @property
    def size(self) -> Vec3:
        return np.array(self.max) - np.array(self.min)

    @property
    def extents(self) -> Vec3:
        """Half the size along each axis."""
        return self.size / 2.0

    @property
    def diagonal(self) -> float:
        return float(np.linalg.norm(self.size))

    @property
    def is_degenerate(self) -> bool:
        """True if the box encloses no volume (any size component is 0)."""
        return bool(np.prod(self.size) == 0.0)

    def encapsulate(self, other: BoundingBox) -> BoundingBox:
        """Return the smallest box containing both boxes."""
        return BoundingBox(
            tuple(min(a, b) for a, b in zip(self.min, other.min)),
            tuple(max(a, b) for a, b in zip(self.max, other.max)),
        )

    def contains_footprint(self, point) -> bool:
        """True if *point* lies inside the box on the horizontal (XZ) plane."""
        return (self.min[0] <= point[0] <= self.max[0]
                and self.min[2] <= point[2] <= self.max[2])

    def to_dict(self) -> dict:
        return {"min": list(self.min), "max": list(self.max)}

    @classmethod
    def from_dict(cls, d: dict) -> BoundingBox:
        return cls(tuple(d["min"]), tuple(d["max"]))


def aggregate_bounds(boxes: Iterable[BoundingBox]) -> BoundingBox:
    """Union of all non-degenerate *boxes*.

    Boxes that enclose no volume (empty renderers, planes) are skipped.  Returns
    ``BoundingBox.zero()`` when nothing remains, which callers treat as
    "nothing to light".
    """
    result: BoundingBox | None = None
    for box in boxes:
        if box.is_degenerate:
            continue
        result = box if result is None else result.encapsulate(box)
    return result if result is not None else BoundingBox.zero()
