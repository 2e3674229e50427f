"""Shared constants and defaults for LazyLight."""

from pathlib import Path

# Working-directory relative paths
DEFAULT_RIG_FILENAME = "LazyLightRig.json"
DEFAULT_PRESET_DIR = Path("LazyLightPresets")

# Grouping node created for every generated rig
GROUP_NAME = "LazyGeneratedLights"
GROUP_TAG = "LazyLight"
LIGHT_NAME_PREFIX = "LazyLight"

# Sufficiency check
SUFFICIENCY_THRESHOLD = 0.5

# Light count (simple mode)
DIAGONAL_PER_LIGHT = 10.0
SIMPLE_MIN_LIGHTS = 1
SIMPLE_MAX_LIGHTS = 3

# Light count (advanced mode)
ADVANCED_MIN_LIGHTS = 1
ADVANCED_MAX_LIGHTS = 10

# Rejection sampler
MIN_SPACING_FACTOR = 0.8
ATTEMPTS_PER_POINT = 20

# Ceiling placement
EXTENT_FRACTION = 0.5
HEIGHT_FRACTION = 0.9
PROBE_HEIGHT = 1.0
SURFACE_OFFSET = 0.1

# Descriptor synthesis ranges
INTENSITY_RANGE = (1.5, 6.0)
RANGE_SCALE = (0.8, 1.2)
SPOT_ANGLE_RANGE = (40.0, 80.0)
INNER_SPOT_RATIO = 0.6
ELEVATION_RANGE = (20.0, 60.0)   # degrees
AZIMUTH_RANGE = (0.0, 360.0)     # degrees
HSV_SATURATION_RANGE = (0.6, 1.0)
HSV_VALUE_RANGE = (0.8, 1.0)

# Warm-white palette (RGB 0..1), used by the "warm" colour mode
WARM_PALETTE = (
    (1.0, 0.95, 0.85),
    (1.0, 0.89, 0.74),
    (1.0, 0.84, 0.67),
    (1.0, 0.78, 0.58),
)
WARM_JITTER = 0.03
