"""Remove a previously generated rig from the host."""

import logging

from lazylight.core.host import SceneHost

logger = logging.getLogger(__name__)


def teardown_rig(host: SceneHost, tag: str) -> int:
    """Destroy every object tagged *tag* (lights and their group node).

    Returns the number of destroy calls issued.  Safe to call when no
    tagged objects exist.
    """
    tagged = host.find_objects_by_tag(tag)
    if not tagged:
        logger.debug("No objects tagged %r to remove", tag)
        return 0
    for ref in tagged:
        host.destroy_object(ref)
    logger.info("Removed %d objects tagged %r", len(tagged), tag)
    return len(tagged)
