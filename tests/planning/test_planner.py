"""Tests for the light placement planner."""

import itertools

import numpy as np
import pytest

from lazylight.core.scene_graph import Scene
from lazylight.planning.bounds import BoundingBox
from lazylight.planning.planner import LightPlanner, PlanStatus
from lazylight.planning.settings import PlacementMode, PlannerSettings
from lazylight.rig.backend import LightComponent
from lazylight.rig.descriptor import LightKind
from lazylight.rig.presets import BUILTIN_PRESETS


def _room_scene():
    scene = Scene()
    scene.add_renderer("room", BoundingBox((0, 0, 0), (10, 2, 10)))
    return scene


def test_end_to_end_single_box():
    scene = _room_scene()
    result = LightPlanner(PlannerSettings(seed=1)).plan(scene)
    assert result.status is PlanStatus.PLANNED
    assert result.requested == 1
    assert len(result.descriptors) == 1
    x, y, z = result.descriptors[0].position
    assert 0.0 <= x <= 10.0
    assert 0.0 <= z <= 10.0
    # Snapped just above the top surface
    assert y == pytest.approx(2.1)


def test_no_probe_keeps_raw_height():
    settings = PlannerSettings(seed=2, project_to_ceiling=False)
    result = LightPlanner(settings).plan(_room_scene())
    assert result.descriptors[0].position[1] == pytest.approx(1.9)


def test_planner_does_not_mutate_host():
    scene = _room_scene()
    before = [c.name for c in scene.children]
    LightPlanner(PlannerSettings(seed=0)).plan(scene)
    assert [c.name for c in scene.children] == before


def test_no_geometry(caplog):
    result = LightPlanner().plan(Scene())
    assert result.status is PlanStatus.NO_GEOMETRY
    assert result.descriptors == []
    assert "No renderable geometry" in caplog.text


def test_degenerate_geometry_aborts():
    scene = Scene()
    scene.add_renderer("empty", BoundingBox((1, 1, 1), (1, 1, 1)))
    scene.add_renderer("ground", BoundingBox((-5, 0, -5), (5, 0, 5)))
    assert LightPlanner().plan(scene).status is PlanStatus.NO_GEOMETRY


def test_already_lit():
    scene = _room_scene()
    scene.add_light("sun", LightComponent(kind=LightKind.DIRECTIONAL, intensity=1.0))
    result = LightPlanner().plan(scene)
    assert result.status is PlanStatus.ALREADY_LIT
    assert result.descriptors == []


def test_dim_lights_do_not_count():
    scene = _room_scene()
    scene.add_light("candle", LightComponent(intensity=0.2))
    assert LightPlanner(PlannerSettings(seed=0)).plan(scene).status is PlanStatus.PLANNED


def test_force_skips_sufficiency_check():
    scene = _room_scene()
    scene.add_light("sun", LightComponent(intensity=5.0))
    assert LightPlanner().plan(scene, force=True).status is PlanStatus.PLANNED


def test_configurable_threshold():
    scene = _room_scene()
    scene.add_light("lamp", LightComponent(intensity=1.0))
    settings = PlannerSettings(sufficiency_threshold=2.0, seed=0)
    assert LightPlanner(settings).plan(scene).status is PlanStatus.PLANNED


def test_hero_objects_restrict_bounds():
    scene = Scene()
    scene.add_renderer("floor", BoundingBox((-50, 0, -50), (50, 0.1, 50)))
    scene.add_renderer("statue", BoundingBox((4, 0, 4), (6, 3, 6)))
    settings = PlannerSettings(hero_objects=["statue"], seed=4)
    result = LightPlanner(settings).plan(scene)
    assert result.bounds == BoundingBox((4, 0, 4), (6, 3, 6))
    for d in result.descriptors:
        assert 4.0 <= d.position[0] <= 6.0
        assert 4.0 <= d.position[2] <= 6.0


def test_unknown_hero_is_no_geometry():
    settings = PlannerSettings(hero_objects=["ghost"])
    assert LightPlanner(settings).plan(_room_scene()).status is PlanStatus.NO_GEOMETRY


@pytest.mark.parametrize("seed", range(15))
@pytest.mark.parametrize("count", [1, 3, 10])
def test_advanced_mode_properties(seed, count):
    scene = Scene()
    bounds = BoundingBox((-10, 0, -10), (10, 8, 10))
    scene.add_renderer("hall", bounds)
    settings = PlannerSettings(mode=PlacementMode.ADVANCED, light_count=count, seed=seed)
    planner = LightPlanner(settings)
    result = planner.plan(scene)
    assert result.requested == count
    assert 1 <= len(result.descriptors) <= count
    radius = planner.placement_radius(bounds)
    positions = [np.array(d.position) for d in result.descriptors]
    for p in positions:
        assert bounds.contains_footprint(p)
        assert 0.0 <= p[1] <= 8.0 + settings.surface_offset
        assert np.linalg.norm(p - bounds.center) <= radius + 1e-9
    for a, b in itertools.combinations(positions, 2):
        assert np.linalg.norm(a - b) >= 0.8 * radius
    for d in result.descriptors:
        assert d.intensity > 0
        if d.kind is LightKind.SPOT:
            assert 0 < d.spot_angle < 180
            assert d.inner_spot_angle == 0.6 * d.spot_angle


def test_advanced_count_is_clamped():
    settings = PlannerSettings(mode=PlacementMode.ADVANCED, light_count=50, seed=0)
    result = LightPlanner(settings).plan(_room_scene())
    assert result.requested == 10


def test_advanced_custom_radius():
    settings = PlannerSettings(mode=PlacementMode.ADVANCED, radius=1.0)
    assert LightPlanner(settings).placement_radius(BoundingBox((0, 0, 0), (10, 2, 10))) == 1.0


def test_undersupply_is_not_an_error():
    settings = PlannerSettings(mode=PlacementMode.ADVANCED, light_count=10,
                               min_spacing_factor=1.5, seed=0)
    result = LightPlanner(settings).plan(_room_scene())
    assert result.status is PlanStatus.PLANNED
    assert len(result.descriptors) < 10
    assert result.undersupplied


def test_preset_applied():
    preset = BUILTIN_PRESETS["IndoorWarm"]
    result = LightPlanner(PlannerSettings(seed=0), preset=preset).plan(_room_scene())
    d = result.descriptors[0]
    assert d.kind is LightKind.POINT
    assert d.color == preset.color
    assert d.intensity == preset.intensity


def test_seeded_plans_repeat():
    a = LightPlanner(PlannerSettings(seed=11)).plan(_room_scene())
    b = LightPlanner(PlannerSettings(seed=11)).plan(_room_scene())
    assert a.descriptors == b.descriptors


@pytest.mark.parametrize("seed", range(20))
def test_advanced_mode_on_thin_floor_places_lights(seed):
    scene = Scene()
    floor = BoundingBox((0, 0, 0), (10, 0.1, 10))
    scene.add_renderer("floor", floor)
    settings = PlannerSettings(mode=PlacementMode.ADVANCED, light_count=3, seed=seed)
    result = LightPlanner(settings).plan(scene)
    assert result.status is PlanStatus.PLANNED
    assert len(result.descriptors) >= 1
    for d in result.descriptors:
        assert floor.contains_footprint(d.position)
        assert 0.0 <= d.position[1] <= 0.1 + settings.surface_offset


def test_no_placement_when_sampler_finds_nothing(monkeypatch, caplog):
    monkeypatch.setattr(LightPlanner, "_advanced_points", lambda self, bounds, count: [])
    settings = PlannerSettings(mode=PlacementMode.ADVANCED, light_count=3, seed=0)
    result = LightPlanner(settings).plan(_room_scene())
    assert result.status is PlanStatus.NO_PLACEMENT
    assert result.descriptors == []
    assert "Could not place any lights" in caplog.text
