"""Named lighting presets stored as JSON files."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from lazylight.constants import DEFAULT_PRESET_DIR
from lazylight.core.config_loader import load_json, save_json
from lazylight.rig.descriptor import LightKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LightingPreset:
    """Default descriptor parameters applied to every light of a rig."""
    name: str
    kind: LightKind = LightKind.POINT
    color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    intensity: float = 1.0
    range: float = 10.0
    angle: float = 60.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.kind.value,
            "color": list(self.color),
            "intensity": self.intensity,
            "range": self.range,
            "angle": self.angle,
        }

    @classmethod
    def from_dict(cls, d: dict) -> "LightingPreset":
        return cls(
            name=d["name"],
            kind=LightKind.from_name(d.get("type", "Point")),
            color=tuple(float(c) for c in d.get("color", (1.0, 1.0, 1.0))[:3]),
            intensity=float(d.get("intensity", 1.0)),
            range=float(d.get("range", 10.0)),
            angle=float(d.get("angle", 60.0)),
        )


BUILTIN_PRESETS: dict[str, LightingPreset] = {
    p.name: p for p in (
        LightingPreset("StudioSetup", LightKind.SPOT, (1.0, 1.0, 1.0), 3.0, 15.0, 60.0),
        LightingPreset("IndoorWarm", LightKind.POINT, (1.0, 0.85, 0.7), 2.0, 10.0, 60.0),
        LightingPreset("Dramatic", LightKind.SPOT, (1.0, 0.6, 0.4), 5.0, 20.0, 30.0),
        LightingPreset("Showcase", LightKind.DIRECTIONAL, (0.9, 0.95, 1.0), 1.5, 0.0, 60.0),
    )
}


class PresetLibrary:
    """Loads presets from ``<directory>/<name>.json``.

    Files on disk take precedence over the built-in table, so users can
    edit the defaults written by ``ensure_defaults``.
    """

    def __init__(self, directory: Path = DEFAULT_PRESET_DIR):
        self.directory = Path(directory)
        self.presets: dict[str, LightingPreset] = dict(BUILTIN_PRESETS)

    def path_for(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def ensure_defaults(self) -> list[str]:
        """Write built-in presets that have no file yet. Returns names written."""
        written = []
        for name, preset in BUILTIN_PRESETS.items():
            path = self.path_for(name)
            if path.exists():
                continue
            save_json(path, preset.to_dict())
            written.append(name)
        if written:
            logger.info("Created default presets: %s", ", ".join(written))
        return written

    def load(self) -> None:
        """Load every preset file in the directory."""
        if not self.directory.is_dir():
            return
        for path in sorted(self.directory.glob("*.json")):
            preset = LightingPreset.from_dict(load_json(path))
            self.presets[preset.name] = preset

    def get_names(self) -> list[str]:
        return list(self.presets.keys())

    def get(self, name: str) -> Optional[LightingPreset]:
        preset = self.presets.get(name)
        if preset is None:
            logger.warning("Unknown lighting preset: %s", name)
        return preset
