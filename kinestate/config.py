"""
Central configuration for kinestate tunables and shared constants.
"""

from __future__ import annotations

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    s = raw.strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    return default


TRACE_ENABLED: bool = _env_bool("KINESTATE_TRACE", False)

logger = logging.getLogger(__name__)

# Frame assigned to spatial states constructed without an explicit reference
DEFAULT_REFERENCE_FRAME: str = os.getenv("KINESTATE_DEFAULT_FRAME", "world")

# Below this norm a rotation vector (or quaternion vector part) is treated as zero
QUATERNION_EPS: float = float(os.getenv("KINESTATE_QUATERNION_EPS", "1e-4"))

# Quaternions with a norm below this cannot be normalized
QUATERNION_MIN_NORM: float = 1e-12

# Use the numba kernels for quaternion products and rotations
USE_NUMBA: bool = _env_bool("KINESTATE_USE_NUMBA", True)

# Prefix used when joint names are generated from a joint count
DEFAULT_JOINT_PREFIX: str = "joint"

# Default noise level injected by Ellipsoid.fit to keep the scatter matrix invertible
ELLIPSOID_FIT_NOISE: float = 0.01

if TRACE_ENABLED:
    logger.setLevel(TRACE)
