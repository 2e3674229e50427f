"""JSON export and import of a lighting rig.

Record layout::

    {
      "lights": [
        {
          "type": "Spot",
          "color": [r, g, b, a],
          "intensity": 3.2,
          "range": 12.0,
          "position": [x, y, z],
          "rotation": [x, y, z, w],
          "spotAngle": 55.0
        }
      ]
    }

There is no version field; import assumes the current layout.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence

from lazylight.core.config_loader import load_json, save_json
from lazylight.rig.descriptor import LightDescriptor, LightKind

logger = logging.getLogger(__name__)


class RigFormatError(ValueError):
    """Raised when a rig record does not match the expected layout."""


def descriptor_to_dict(d: LightDescriptor) -> dict:
    return {
        "type": d.kind.value,
        "color": [*d.color, 1.0],
        "intensity": d.intensity,
        "range": d.range,
        "position": list(d.position),
        "rotation": list(d.rotation),
        "spotAngle": d.spot_angle,
    }


def descriptor_from_dict(entry: dict) -> LightDescriptor:
    try:
        color = entry["color"]
        if len(color) not in (3, 4):
            raise RigFormatError(f"color must have 3 or 4 components, got {len(color)}")
        return LightDescriptor(
            kind=LightKind.from_name(entry["type"]),
            position=entry["position"],
            rotation=entry["rotation"],
            color=color[:3],
            intensity=entry["intensity"],
            range=entry["range"],
            spot_angle=entry.get("spotAngle", 0.0),
        )
    except RigFormatError:
        raise
    except KeyError as e:
        raise RigFormatError(f"Light entry is missing field {e.args[0]!r}") from e
    except (TypeError, AttributeError, ValueError) as e:
        raise RigFormatError(f"Malformed light entry: {e}") from e


def rig_to_dict(descriptors: Sequence[LightDescriptor]) -> dict:
    return {"lights": [descriptor_to_dict(d) for d in descriptors]}


def rig_from_dict(record: dict) -> list[LightDescriptor]:
    if not isinstance(record, dict) or not isinstance(record.get("lights"), list):
        raise RigFormatError("Rig record must be an object with a 'lights' list")
    return [descriptor_from_dict(entry) for entry in record["lights"]]


def export_rig(descriptors: Sequence[LightDescriptor], path: Path) -> None:
    save_json(Path(path), rig_to_dict(descriptors))
    logger.info("Exported %d lights to %s", len(descriptors), path)


def import_rig(path: Path) -> Optional[list[LightDescriptor]]:
    """Read a rig file.  Returns None when there is nothing to import."""
    path = Path(path)
    if not path.exists():
        logger.info("No rig file at %s; nothing to import.", path)
        return None
    descriptors = rig_from_dict(load_json(path))
    logger.info("Loaded %d lights from %s", len(descriptors), path)
    return descriptors
