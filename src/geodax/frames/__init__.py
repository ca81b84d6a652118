"""Earth-orientation frame transformations.

This sub-module provides the transformations between the Earth-fixed
frame and the two Earth-orientation-dependent intermediate frames:

- **Earth orientation**: GMST, the sidereal rotation matrix and the
  harmonic polar motion model.
- **PEF transformations**: ECEF <-> PEF by polar motion.
- **TEME transformations**: PEF <-> TEME by sidereal rotation, including
  the Earth-rotation velocity term, and the chained ECEF <-> TEME forms.
"""

from .earth_orientation import (
    gmst,
    polar_motion,
    polar_motion_angles,
    sidereal_rotation,
)
from .pef import (
    ecef_to_pef,
    pef_to_ecef,
    velocity_ecef_to_pef,
    velocity_pef_to_ecef,
)
from .teme import (
    ecef_to_teme,
    pef_to_teme,
    teme_to_ecef,
    teme_to_pef,
    velocity_ecef_to_teme,
    velocity_pef_to_teme,
    velocity_teme_to_ecef,
    velocity_teme_to_pef,
)

__all__ = [
    # Earth orientation
    "gmst",
    "polar_motion",
    "polar_motion_angles",
    "sidereal_rotation",
    # PEF
    "ecef_to_pef",
    "pef_to_ecef",
    "velocity_ecef_to_pef",
    "velocity_pef_to_ecef",
    # TEME
    "ecef_to_teme",
    "pef_to_teme",
    "teme_to_ecef",
    "teme_to_pef",
    "velocity_ecef_to_teme",
    "velocity_pef_to_teme",
    "velocity_teme_to_ecef",
    "velocity_teme_to_pef",
]
