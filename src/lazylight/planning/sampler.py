"""Placement point samplers.

Two strategies pick where lights go:

* **ceiling** (simple mode): independent horizontal offsets around the
  bounds center at a fixed height near the top, optionally snapped onto
  the surface found by a downward probe.
* **disk packing** (advanced mode): rejection sampling inside a sphere so
  that no two accepted points are closer than a fraction of the radius.

All randomness comes from the ``numpy.random.Generator`` passed in.
"""

import logging
from typing import Callable, Optional

import numpy as np

from lazylight.constants import (
    ATTEMPTS_PER_POINT, DIAGONAL_PER_LIGHT, EXTENT_FRACTION, HEIGHT_FRACTION,
    MIN_SPACING_FACTOR, PROBE_HEIGHT, SIMPLE_MAX_LIGHTS, SIMPLE_MIN_LIGHTS,
    SURFACE_OFFSET,
)
from lazylight.core.math_utils import Vec3, clamp
from lazylight.planning.bounds import BoundingBox

logger = logging.getLogger(__name__)

Raycaster = Callable[[tuple, float], Optional[tuple]]


def simple_light_count(bounds: BoundingBox) -> int:
    """One light per ten units of diagonal, clamped to 1..3."""
    return int(clamp(round(bounds.diagonal / DIAGONAL_PER_LIGHT),
                     SIMPLE_MIN_LIGHTS, SIMPLE_MAX_LIGHTS))


def random_point_in_sphere(rng: np.random.Generator, center: Vec3, radius: float) -> Vec3:
    """Uniformly distributed point inside the ball of *radius* around *center*."""
    direction = rng.standard_normal(3)
    norm = np.linalg.norm(direction)
    while norm < 1e-12:
        direction = rng.standard_normal(3)
        norm = np.linalg.norm(direction)
    r = radius * rng.random() ** (1.0 / 3.0)
    return np.asarray(center, dtype=np.float64) + direction / norm * r


def sample_disk_packing(
    rng: np.random.Generator,
    center: Vec3,
    radius: float,
    count: int,
    min_spacing_factor: float = MIN_SPACING_FACTOR,
    attempts_per_point: int = ATTEMPTS_PER_POINT,
    project: Optional[Callable[[Vec3], Vec3]] = None,
) -> list[Vec3]:
    """Rejection-sample up to *count* well-separated points in a sphere.

    Each candidate is first mapped through *project* (when given) and is
    kept only if it is farther than ``min_spacing_factor * radius`` from
    every kept point.  Sampling stops after *count* points or
    ``attempts_per_point * count`` draws, so fewer points than requested
    may come back.
    """
    if count <= 0:
        return []
    min_dist = min_spacing_factor * radius
    max_attempts = attempts_per_point * count
    accepted: list[Vec3] = []
    attempts = 0
    while len(accepted) < count and attempts < max_attempts:
        attempts += 1
        candidate = random_point_in_sphere(rng, center, radius)
        if project is not None:
            candidate = np.asarray(project(candidate), dtype=np.float64)
        if all(np.linalg.norm(candidate - p) > min_dist for p in accepted):
            accepted.append(candidate)

    if len(accepted) < count:
        logger.debug("Placed %d of %d lights after %d attempts",
                     len(accepted), count, attempts)
    return accepted


def sample_ceiling_points(
    rng: np.random.Generator,
    bounds: BoundingBox,
    count: int,
    extent_fraction: float = EXTENT_FRACTION,
    height_fraction: float = HEIGHT_FRACTION,
) -> list[Vec3]:
    """Random horizontal offsets around the center at a height near the top."""
    center = bounds.center
    ext = bounds.extents
    y = center[1] + ext[1] * height_fraction
    points = []
    for _ in range(count):
        dx, dz = rng.uniform(-1.0, 1.0, size=2)
        points.append(np.array([
            center[0] + dx * ext[0] * extent_fraction,
            y,
            center[2] + dz * ext[2] * extent_fraction,
        ], dtype=np.float64))
    return points


def project_to_ceiling(
    points: list[Vec3],
    bounds: BoundingBox,
    raycast_down: Raycaster,
    probe_height: float = PROBE_HEIGHT,
    surface_offset: float = SURFACE_OFFSET,
) -> list[Vec3]:
    """Snap each point just above the surface below it.

    The probe starts *probe_height* above the bounds and reaches through
    the whole bounds height.  Points whose probe misses keep their raw
    position.
    """
    start_y = bounds.max[1] + probe_height
    max_distance = probe_height + float(bounds.size[1])
    result = []
    for p in points:
        hit = raycast_down((float(p[0]), start_y, float(p[2])), max_distance)
        if hit is None:
            result.append(np.array(p, dtype=np.float64))
        else:
            result.append(np.array([p[0], hit[1] + surface_offset, p[2]], dtype=np.float64))
    return result
