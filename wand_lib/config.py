"""Shared configuration for the smart wand engine.

This module centralizes the default option values and the fixed engine
constants used by:
    - wand_lib.domain.options (WandOptions defaults)
    - wand_lib.analysis (seed thickness, ridge walking search grids)
    - wand_lib.api.services (variation worker pool)

Having these values in one place keeps the presets, the service and the
CLI consistent, and makes it easy to tune behaviour globally.
"""

from __future__ import annotations

import logging

# --- Default option values ---

# Adaptive threshold: local window size (odd) and multiplier of the local mean
DEFAULT_THRESHOLD_WINDOW = 15
DEFAULT_THRESHOLD_BIAS = 0.90

# Thickness gating: fraction of seed thickness required to keep walking
DEFAULT_THICKNESS_KEEP_FRAC = 0.5

# Despeckle: components smaller than this many pixels are cleared
DEFAULT_MIN_COMPONENT = 30

# Tube walking
DEFAULT_STEP_SIZE = 2.0
DEFAULT_MOMENTUM = 0.8
DEFAULT_MAX_GAP = 15.0
DEFAULT_GAP_ANGLE = 45.0  # degrees either side of the current heading

# Hard safety caps per directional walk
DEFAULT_MAX_POINTS = 8000
DEFAULT_MAX_STEPS = 5000

# Output
DEFAULT_SIMPLIFY_EPS = 1.0
DEFAULT_RESAMPLE_STEP = None

# --- Engine constants ---

SEED_THICKNESS_WINDOW = 3     # half-size of the window sampled around the seed
MIN_SEED_THICKNESS = 1.0      # floor for the seed half-width estimate
RECENTER_RADIUS = 3           # max pixel offset when re-centring the seed
ANGLE_STEP = 0.2              # radians, direction scan and gap cone
PERPENDICULAR_STEP = 0.5      # pixels between perpendicular samples
MIN_PERPENDICULAR_REACH = 2   # pixels searched either side at minimum
CENTER_BIAS = 0.01            # penalty per pixel of perpendicular offset
STALL_DISTANCE = 0.1          # pixels, smaller displacement ends the walk
DIRECTION_EPSILON = 1e-9      # vector length treated as zero

# Luminance weights (Rec. 601)
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

# Variation generation
VARIATION_MAX_WORKERS = 4

# Logging
PACKAGE_LOGGER = 'wand_lib'
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
_OWNED_HANDLER_ATTR = '_wand_lib_owned'

logger = logging.getLogger(__name__)


def configure_logging(level: str | int = 'WARNING', log_file: str | None = None,
                      stream=None) -> logging.Logger:
    """Attach console and optional file handlers to the wand_lib logger.

    Only the package logger is configured, so the root logger and other
    libraries keep whatever the host application set up. Handlers added by
    an earlier call are closed and replaced, so calling this again changes
    the level or the file without duplicating output.

    Args:
        level: Level name ('DEBUG', 'INFO', ...), case-insensitive, or a
            numeric logging level.
        log_file: Optional path; records are appended there as well.
        stream: Console stream. Defaults to sys.stderr.

    Returns:
        The configured 'wand_lib' logger.

    Raises:
        ValueError: If level is not a known level name.

    Example:
        Configure at startup::

            from wand_lib.config import configure_logging
            configure_logging(level='DEBUG', log_file='wand.log')
    """
    if isinstance(level, str):
        log_level = logging.getLevelName(level.upper())
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown log level: {level!r}")
    else:
        log_level = int(level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if getattr(handler, _OWNED_HANDLER_ATTR, False):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers: list = [logging.StreamHandler(stream)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _OWNED_HANDLER_ATTR, True)
        package_logger.addHandler(handler)

    package_logger.setLevel(log_level)
    package_logger.propagate = False

    logger.debug("Logging configured: level=%s, file=%s",
                 logging.getLevelName(log_level), log_file or '-')
    return package_logger
