"""LazyLight command-line entry point.

Usage::

    lazylight scene.json generate --seed 7
    lazylight scene.json generate --mode advanced --count 5 --preset Dramatic
    lazylight scene.json export --rig LazyLightRig.json
    lazylight scene.json delete
    lazylight scene.json import --rig LazyLightRig.json

Mutating commands (generate, delete, import) write the scene file back.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from lazylight.constants import DEFAULT_PRESET_DIR, DEFAULT_RIG_FILENAME
from lazylight.coordination.generator import LazyLightGenerator
from lazylight.planning.settings import PlacementMode, PlannerSettings, load_settings
from lazylight.rig.backend import backend_names, get_backend
from lazylight.rig.presets import PresetLibrary
from lazylight.scene.scene_description import load_scene, save_scene

logger = logging.getLogger(__name__)

COMMANDS = ("generate", "delete", "export", "import")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lazylight",
        description="Place lights in a scene that is not lit well enough.",
    )
    p.add_argument("scene", type=Path, help="Scene description JSON file")
    p.add_argument("command", choices=COMMANDS)
    p.add_argument("--config", type=Path, help="Planner settings JSON file")
    p.add_argument("--mode", choices=[m.value for m in PlacementMode])
    p.add_argument("--count", type=int, help="Light count in advanced mode (1-10)")
    p.add_argument("--radius", type=float, help="Placement radius in advanced mode")
    p.add_argument("--preset", help="Lighting preset name")
    p.add_argument("--presets-dir", type=Path, default=DEFAULT_PRESET_DIR)
    p.add_argument("--hero", nargs="+", default=None, metavar="NAME",
                   help="Only light the bounds of these renderers")
    p.add_argument("--seed", type=int)
    p.add_argument("--rig", type=Path, default=Path(DEFAULT_RIG_FILENAME),
                   help="Rig file for export/import")
    p.add_argument("--backend", choices=backend_names(), default="builtin")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def settings_from_args(args: argparse.Namespace) -> PlannerSettings:
    settings = load_settings(args.config) if args.config else PlannerSettings()
    overrides = {
        "mode": args.mode,
        "light_count": args.count,
        "radius": args.radius,
        "preset_name": args.preset,
        "hero_objects": args.hero,
        "seed": args.seed,
    }
    return replace(settings, **{k: v for k, v in overrides.items() if v is not None})


def run(args: argparse.Namespace) -> int:
    settings = settings_from_args(args)
    scene = load_scene(args.scene, get_backend(args.backend))

    presets = PresetLibrary(args.presets_dir)
    presets.ensure_defaults()
    presets.load()

    generator = LazyLightGenerator(scene, settings, presets)
    if args.command == "generate":
        generator.generate()
    elif args.command == "delete":
        generator.delete()
    elif args.command == "export":
        generator.export(args.rig)
        return 0
    elif args.command == "import":
        if generator.import_(args.rig) is None:
            return 0
    save_scene(scene, args.scene)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Launch the LazyLight command line."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(name)s: %(message)s")
    try:
        return run(args)
    except (OSError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
