"""Tests for placement samplers."""

import itertools

import numpy as np
import pytest

from lazylight.planning.bounds import BoundingBox
from lazylight.planning.sampler import (
    project_to_ceiling, random_point_in_sphere, sample_ceiling_points,
    sample_disk_packing, simple_light_count,
)


@pytest.mark.parametrize("size, expected", [
    ((10, 2, 10), 1),
    ((1, 1, 1), 1),
    ((20, 1, 10), 2),
    ((100, 10, 100), 3),
])
def test_simple_light_count(size, expected):
    b = BoundingBox((0, 0, 0), size)
    assert simple_light_count(b) == expected


def test_random_point_in_sphere_within_radius():
    rng = np.random.default_rng(0)
    center = np.array([1.0, 2.0, 3.0])
    for _ in range(200):
        p = random_point_in_sphere(rng, center, 2.5)
        assert np.linalg.norm(p - center) <= 2.5


@pytest.mark.parametrize("seed", range(20))
@pytest.mark.parametrize("count", [1, 2, 3, 5, 10])
def test_disk_packing_properties(seed, count):
    rng = np.random.default_rng(seed)
    center = np.array([0.0, 1.0, -2.0])
    radius = 4.0
    points = sample_disk_packing(rng, center, radius, count)
    assert 1 <= len(points) <= count
    for p in points:
        assert np.linalg.norm(p - center) <= radius + 1e-9
    for a, b in itertools.combinations(points, 2):
        assert np.linalg.norm(a - b) >= 0.8 * radius


def test_disk_packing_zero_count():
    assert sample_disk_packing(np.random.default_rng(0), np.zeros(3), 1.0, 0) == []


def test_disk_packing_undersupply_is_bounded():
    # Spacing larger than the sphere: only one point can ever fit
    rng = np.random.default_rng(3)
    points = sample_disk_packing(rng, np.zeros(3), 1.0, 5, min_spacing_factor=2.5)
    assert len(points) == 1


def test_disk_packing_projects_before_spacing():
    rng = np.random.default_rng(1)
    flatten = lambda p: np.array([p[0], 0.0, p[2]])
    points = sample_disk_packing(rng, np.zeros(3), 5.0, 3, project=flatten)
    assert len(points) >= 1
    assert all(p[1] == 0.0 for p in points)
    for a, b in itertools.combinations(points, 2):
        assert np.linalg.norm(a - b) > 4.0


def test_disk_packing_reproducible():
    a = sample_disk_packing(np.random.default_rng(42), np.zeros(3), 3.0, 4)
    b = sample_disk_packing(np.random.default_rng(42), np.zeros(3), 3.0, 4)
    np.testing.assert_array_equal(np.array(a), np.array(b))


@pytest.mark.parametrize("seed", range(10))
def test_ceiling_points_inside_footprint(seed):
    rng = np.random.default_rng(seed)
    b = BoundingBox((0, 0, 0), (10, 2, 10))
    points = sample_ceiling_points(rng, b, 3)
    assert len(points) == 3
    for p in points:
        assert 2.5 <= p[0] <= 7.5
        assert 2.5 <= p[2] <= 7.5
        assert p[1] == pytest.approx(1.9)


def test_project_to_ceiling_snaps_on_hit():
    b = BoundingBox((0, 0, 0), (10, 2, 10))
    calls = []

    def raycast(origin, max_distance):
        calls.append((origin, max_distance))
        return (origin[0], 2.0, origin[2])

    out = project_to_ceiling([np.array([5.0, 1.9, 5.0])], b, raycast)
    np.testing.assert_array_almost_equal(out[0], [5.0, 2.1, 5.0])
    assert calls == [((5.0, 3.0, 5.0), 3.0)]


def test_project_to_ceiling_keeps_raw_on_miss():
    b = BoundingBox((0, 0, 0), (10, 2, 10))
    raw = np.array([5.0, 1.9, 5.0])
    out = project_to_ceiling([raw], b, lambda origin, dist: None)
    np.testing.assert_array_equal(out[0], raw)
