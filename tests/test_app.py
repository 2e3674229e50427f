"""Tests for the command-line front end."""

import json

import pytest

from lazylight.app import build_parser, main, settings_from_args
from lazylight.planning.settings import PlacementMode

SCENE = {
    "renderers": [{"name": "room", "bounds": {"min": [0, 0, 0], "max": [10, 2, 10]}}],
}


@pytest.fixture
def scene_file(tmp_path):
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(SCENE))
    return path


def _run(scene_file, tmp_path, *args):
    return main([str(scene_file), *args, "--presets-dir", str(tmp_path / "presets")])


def _lights(scene_file):
    return json.loads(scene_file.read_text()).get("lights", [])


def test_settings_overrides(tmp_path):
    config = tmp_path / "planner.json"
    config.write_text(json.dumps({"light_count": 2, "sufficiency_threshold": 0.9}))
    args = build_parser().parse_args([
        "scene.json", "generate", "--config", str(config), "--mode", "advanced",
        "--radius", "3", "--hero", "a", "b", "--seed", "4",
    ])
    s = settings_from_args(args)
    assert s.mode is PlacementMode.ADVANCED
    assert s.light_count == 2
    assert s.sufficiency_threshold == 0.9
    assert s.radius == 3.0
    assert s.hero_objects == ["a", "b"]
    assert s.seed == 4


def test_generate_writes_scene(scene_file, tmp_path):
    assert _run(scene_file, tmp_path, "generate", "--seed", "1") == 0
    lights = _lights(scene_file)
    assert len(lights) == 1
    assert lights[0]["tag"] == "LazyLight"
    assert (tmp_path / "presets" / "StudioSetup.json").exists()


def test_full_command_cycle(scene_file, tmp_path):
    rig = tmp_path / "rig.json"
    assert _run(scene_file, tmp_path, "generate", "--mode", "advanced",
                "--count", "3", "--seed", "2") == 0
    generated = _lights(scene_file)
    assert _run(scene_file, tmp_path, "export", "--rig", str(rig)) == 0
    assert _run(scene_file, tmp_path, "delete") == 0
    assert _lights(scene_file) == []
    assert _run(scene_file, tmp_path, "import", "--rig", str(rig)) == 0
    assert _lights(scene_file) == generated


def test_import_missing_rig(scene_file, tmp_path):
    before = scene_file.read_text()
    assert _run(scene_file, tmp_path, "import", "--rig", str(tmp_path / "none.json")) == 0
    assert scene_file.read_text() == before


def test_bad_backend_exits_nonzero(scene_file, tmp_path):
    with pytest.raises(SystemExit):
        _run(scene_file, tmp_path, "generate", "--backend", "vulkan")


def test_invalid_settings_exit_code(scene_file, tmp_path):
    assert _run(scene_file, tmp_path, "generate", "--radius", "-2") == 1


def test_missing_scene_exit_code(tmp_path):
    assert _run(tmp_path / "missing.json", tmp_path, "generate") == 1
