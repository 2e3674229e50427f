"""Generate / Delete / Export / Import commands against a scene host.

Every command runs to completion and reports problems through the log;
"nothing to do" outcomes are not errors.
"""

import logging
from pathlib import Path
from typing import Optional

import numpy as np

from lazylight.constants import DEFAULT_RIG_FILENAME, GROUP_NAME, GROUP_TAG, LIGHT_NAME_PREFIX
from lazylight.core.events import EventBus, EventType
from lazylight.core.host import SceneHost
from lazylight.planning.planner import LightPlanner, PlanResult, PlanStatus
from lazylight.planning.settings import PlannerSettings
from lazylight.rig.descriptor import LightDescriptor
from lazylight.rig.presets import PresetLibrary
from lazylight.rig.serialization import export_rig, import_rig
from lazylight.rig.teardown import teardown_rig

logger = logging.getLogger(__name__)


class LazyLightGenerator:
    """Wires the planner, rig teardown and rig files to one host."""

    def __init__(self, host: SceneHost, settings: Optional[PlannerSettings] = None,
                 presets: Optional[PresetLibrary] = None,
                 event_bus: Optional[EventBus] = None,
                 tag: str = GROUP_TAG):
        self.host = host
        self.settings = settings or PlannerSettings()
        self.presets = presets or PresetLibrary()
        self.event_bus = event_bus or EventBus()
        self.tag = tag
        self.rng = np.random.default_rng(self.settings.seed)

    def generate(self) -> PlanResult:
        """Plan a rig and replace any rig generated earlier.

        An existing rig is re-planned regardless of how well it lights the
        scene; the host is only touched when planning places at least one
        light.
        """
        preset = None
        if self.settings.preset_name:
            preset = self.presets.get(self.settings.preset_name)

        replan = bool(self.host.find_objects_by_tag(self.tag))
        planner = LightPlanner(self.settings, preset, self.rng)
        result = planner.plan(self.host, force=replan)
        if result.status is not PlanStatus.PLANNED or not result.descriptors:
            self.event_bus.publish(EventType.PLANNING_SKIPPED, reason=result.status)
            return result

        teardown_rig(self.host, self.tag)
        self._build_rig(result.descriptors)
        logger.info("Generated %d lights%s", len(result.descriptors),
                    f" from preset {preset.name}" if preset else "")
        self.event_bus.publish(EventType.RIG_GENERATED, count=len(result.descriptors),
                               requested=result.requested, bounds=result.bounds)
        return result

    def delete(self) -> int:
        removed = teardown_rig(self.host, self.tag)
        self.event_bus.publish(EventType.RIG_TORN_DOWN, removed=removed)
        return removed

    def export(self, path: Path = Path(DEFAULT_RIG_FILENAME)) -> int:
        descriptors = self.host.light_descriptors(self.tag)
        export_rig(descriptors, path)
        self.event_bus.publish(EventType.RIG_EXPORTED, path=Path(path), count=len(descriptors))
        return len(descriptors)

    def import_(self, path: Path = Path(DEFAULT_RIG_FILENAME)) -> Optional[int]:
        """Replace the current rig with the one stored in *path*.

        Returns the number of lights created, or None when *path* does not
        exist (the scene is left untouched).
        """
        descriptors = import_rig(path)
        if descriptors is None:
            return None
        teardown_rig(self.host, self.tag)
        if descriptors:
            self._build_rig(descriptors)
        else:
            logger.info("Rig file %s has no lights; current rig removed.", path)
        self.event_bus.publish(EventType.RIG_IMPORTED, path=Path(path), count=len(descriptors))
        return len(descriptors)

    def _build_rig(self, descriptors: list[LightDescriptor]) -> None:
        group = self.host.create_group(GROUP_NAME, tag=self.tag)
        for i, descriptor in enumerate(descriptors):
            self.host.create_light(descriptor, parent=group, tag=self.tag,
                                   name=f"{LIGHT_NAME_PREFIX}_{descriptor.kind.value}_{i}")
