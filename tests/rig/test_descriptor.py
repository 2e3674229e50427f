"""Tests for light descriptors."""

import numpy as np
import pytest

from lazylight.rig.descriptor import LightDescriptor, LightKind


def test_defaults():
    d = LightDescriptor(LightKind.POINT)
    assert d.rotation == (0.0, 0.0, 0.0, 1.0)
    assert d.spot_angle == 0.0


def test_numpy_values_coerced():
    d = LightDescriptor(LightKind.POINT, position=np.array([1, 2, 3]),
                        intensity=np.float64(2.0))
    assert d.position == (1.0, 2.0, 3.0)
    assert type(d.position[0]) is float
    assert type(d.intensity) is float


def test_immutable():
    d = LightDescriptor(LightKind.POINT)
    with pytest.raises(AttributeError):
        d.intensity = 5.0


def test_inner_spot_angle():
    d = LightDescriptor(LightKind.SPOT, spot_angle=70.0)
    assert d.inner_spot_angle == 70.0 * 0.6


@pytest.mark.parametrize("kwargs", [
    {"kind": LightKind.POINT, "intensity": 0.0},
    {"kind": LightKind.POINT, "intensity": -1.0},
    {"kind": LightKind.POINT, "range": -0.1},
    {"kind": LightKind.SPOT, "spot_angle": 0.0},
    {"kind": LightKind.SPOT, "spot_angle": 180.0},
    {"kind": LightKind.POINT, "rotation": (0.0, 0.0, 0.0, 2.0)},
    {"kind": LightKind.POINT, "position": (1.0, 2.0)},
    {"kind": "Point"},
])
def test_invalid_descriptors(kwargs):
    with pytest.raises(ValueError):
        LightDescriptor(**kwargs)


@pytest.mark.parametrize("name, kind", [
    ("Spot", LightKind.SPOT),
    ("SPOT", LightKind.SPOT),
    ("rectangle", LightKind.RECTANGLE),
    ("Directional", LightKind.DIRECTIONAL),
])
def test_kind_from_name(name, kind):
    assert LightKind.from_name(name) is kind


def test_kind_from_unknown_name():
    with pytest.raises(ValueError):
        LightKind.from_name("Area")
