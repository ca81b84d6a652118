"""Earth-orientation angles and matrices.

Provides the two rotations that separate the Earth-fixed frame from the
true-equator mean-equinox frame:

- **Sidereal rotation**: ``S = Rz(GMST).T`` with ``S.T @ r_teme = r_pef``.
- **Polar motion**: ``W = Rx(yp) @ Ry(xp)`` with ``W.T @ r_pef = r_ecef``.

GMST uses the IAU 1982 polynomial with UTC taken as UT1.  Polar motion uses
a two-term harmonic model (annual and Chandler periods) of IERS Bulletin A
predictions instead of tabulated Earth orientation parameters.

All functions are pure functions of the :class:`~geodax.instant.Instant`
and use ``jnp`` throughout; a non-finite time propagates to the result.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array

from geodax.config import get_dtype
from geodax.constants import AS2RAD, JD2000, SECONDS_PER_DAY
from geodax.instant import Instant
from geodax.linalg import Rx, Ry, Rz
from geodax.utils import from_radians

# Reference epoch of the harmonic polar motion model
_POLAR_MOTION_EPOCH_MJD = 57226.0

# Annual and Chandler wobble periods. Units: *days*
_ANNUAL_PERIOD = 365.25
_CHANDLER_PERIOD = 435.0


def gmst(instant: Instant, use_degrees: bool = False) -> Array:
    """Compute Greenwich Mean Sidereal Time using the IAU 1982 model.

    Julian centuries of UT1 since J2000 are formed from the split day
    representation of the instant, so the integer day difference is exact.

    Args:
        instant (Instant): Time of evaluation (UTC, used as UT1).
        use_degrees (bool): If ``True``, return degrees. Default: ``False``

    Returns:
        Array: GMST in ``[0, 2pi)``. Units: *rad* (or *deg*)

    References:

        1. D. Vallado, *Fundamentals of Astrodynamics and Applications
           (4th Ed.)*, 2010.
    """
    dtype = get_dtype()
    days_from_j2000 = jnp.asarray(instant.jd_day - int(JD2000), dtype=dtype)
    t_ut1 = (days_from_j2000 + instant.seconds / SECONDS_PER_DAY) / 36525.0

    # Seconds of sidereal time
    gmst_sec = (67310.54841
                + (876600.0 * 3600.0 + 8640184.812866) * t_ut1
                + 0.093104 * t_ut1 * t_ut1
                - 6.2e-6 * t_ut1 * t_ut1 * t_ut1)

    # 1 second of time is 1/240 degree
    gmst_rad = jnp.remainder(jnp.deg2rad(gmst_sec / 240.0), 2.0 * jnp.pi)

    return from_radians(gmst_rad, use_degrees)


def sidereal_rotation(instant: Instant) -> Array:
    """Sidereal rotation matrix ``S`` relating TEME and PEF.

    ``S.T @ r_teme`` gives the PEF position.

    Args:
        instant (Instant): Time of evaluation.

    Returns:
        Array: 3x3 matrix ``Rz(GMST).T``.
    """
    return Rz(gmst(instant)).T


def polar_motion_angles(instant: Instant) -> tuple[Array, Array]:
    """Pole coordinates from the harmonic Bulletin A model.

    Args:
        instant (Instant): Time of evaluation.

    Returns:
        tuple[Array, Array]: ``(xp, yp)``. Units: *rad*

    References:

        1. IERS Bulletin A, pole prediction formulae.
    """
    days = instant.mjd() - _POLAR_MOTION_EPOCH_MJD
    a = 2.0 * jnp.pi * days / _ANNUAL_PERIOD
    c = 2.0 * jnp.pi * days / _CHANDLER_PERIOD

    xp = (0.1033 + 0.0494 * jnp.cos(a) + 0.0482 * jnp.sin(a)
          + 0.0297 * jnp.cos(c) + 0.0307 * jnp.sin(c))
    yp = (0.3498 + 0.0441 * jnp.cos(a) - 0.0393 * jnp.sin(a)
          + 0.0307 * jnp.cos(c) - 0.0297 * jnp.sin(c))

    return xp * AS2RAD, yp * AS2RAD


def polar_motion(instant: Instant) -> Array:
    """Polar motion matrix ``W``.

    ``W.T @ r_pef`` gives the ECEF position.

    Args:
        instant (Instant): Time of evaluation.

    Returns:
        Array: 3x3 matrix ``Rx(yp) @ Ry(xp)``.
    """
    xp, yp = polar_motion_angles(instant)
    return Rx(yp) @ Ry(xp)
