"""PEF <-> TEME transformations and the chained ECEF <-> TEME transforms.

TEME (True Equator, Mean Equinox) removes the sidereal rotation from PEF
by the Greenwich Mean Sidereal Time.  Because PEF rotates with the Earth,
velocities pick up the transport term ``omega x r`` with
``omega = [0, 0, OMEGA_EARTH_LOD]``:

- **TEME -> PEF**: ``v_pef = S.T @ v_teme - omega x r_pef``
- **PEF -> TEME**: ``v_teme = inv(S.T) @ (v_pef + omega x r_pef)``

All inputs and outputs use SI base units (metres, metres/second).
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array

from geodax.config import get_dtype
from geodax.constants import OMEGA_EARTH_LOD
from geodax.frames.earth_orientation import sidereal_rotation
from geodax.frames.pef import (
    ecef_to_pef,
    pef_to_ecef,
    velocity_ecef_to_pef,
    velocity_pef_to_ecef,
)
from geodax.instant import Instant
from geodax.linalg import invert_matrix, matrix_times_vec, transpose, transpose_times_vec
from geodax.types import (
    CartesianPoint,
    CartesianVelocity,
    PEFPoint,
    PEFVelocity,
    TEMEPoint,
    TEMEVelocity,
    as_vector,
)


def _omega_cross(r_pef: Array) -> Array:
    omega = jnp.array([0.0, 0.0, OMEGA_EARTH_LOD], dtype=get_dtype())
    return jnp.cross(omega, r_pef)


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------


def teme_to_pef(point: TEMEPoint, instant: Instant) -> PEFPoint:
    """Transform a TEME position to PEF, ``r_pef = S.T @ r_teme``.

    Args:
        point (TEMEPoint): TEME position. Units: *m*
        instant (Instant): Time of the position (UTC).

    Returns:
        PEFPoint: PEF position. Units: *m*
    """
    s = sidereal_rotation(instant)
    return PEFPoint(*transpose_times_vec(s, as_vector(point)))


def pef_to_teme(point: PEFPoint, instant: Instant) -> TEMEPoint:
    """Transform a PEF position to TEME, ``r_teme = inv(S.T) @ r_pef``.

    Args:
        point (PEFPoint): PEF position. Units: *m*
        instant (Instant): Time of the position (UTC).

    Returns:
        TEMEPoint: TEME position. Units: *m*

    Raises:
        SingularMatrixError: If the sidereal rotation cannot be inverted.
    """
    s_inv = invert_matrix(transpose(sidereal_rotation(instant)))
    return TEMEPoint(*matrix_times_vec(s_inv, as_vector(point)))


def ecef_to_teme(point: CartesianPoint, instant: Instant) -> TEMEPoint:
    """Transform an ECEF position to TEME through PEF."""
    return pef_to_teme(ecef_to_pef(point, instant), instant)


def teme_to_ecef(point: TEMEPoint, instant: Instant) -> CartesianPoint:
    """Transform a TEME position to ECEF through PEF."""
    return pef_to_ecef(teme_to_pef(point, instant), instant)


# ---------------------------------------------------------------------------
# Velocities
# ---------------------------------------------------------------------------


def velocity_teme_to_pef(
    point: TEMEPoint, velocity: TEMEVelocity, instant: Instant
) -> PEFVelocity:
    """Transform a TEME velocity to PEF.

    ``v_pef = S.T @ v_teme - omega x r_pef``

    Args:
        point (TEMEPoint): TEME position the velocity belongs to. Units: *m*
        velocity (TEMEVelocity): TEME velocity. Units: *m/s*
        instant (Instant): Time of the state (UTC).

    Returns:
        PEFVelocity: PEF velocity. Units: *m/s*
    """
    s = sidereal_rotation(instant)
    r_pef = transpose_times_vec(s, as_vector(point))
    v_pef = transpose_times_vec(s, as_vector(velocity)) - _omega_cross(r_pef)
    return PEFVelocity(*v_pef)


def velocity_pef_to_teme(
    point: PEFPoint, velocity: PEFVelocity, instant: Instant
) -> TEMEVelocity:
    """Transform a PEF velocity to TEME.

    Inverse of :func:`velocity_teme_to_pef`:
    ``v_teme = inv(S.T) @ (v_pef + omega x r_pef)``

    Args:
        point (PEFPoint): PEF position the velocity belongs to. Units: *m*
        velocity (PEFVelocity): PEF velocity. Units: *m/s*
        instant (Instant): Time of the state (UTC).

    Returns:
        TEMEVelocity: TEME velocity. Units: *m/s*

    Raises:
        SingularMatrixError: If the sidereal rotation cannot be inverted.
    """
    s_inv = invert_matrix(transpose(sidereal_rotation(instant)))
    v_inertial = as_vector(velocity) + _omega_cross(as_vector(point))
    return TEMEVelocity(*matrix_times_vec(s_inv, v_inertial))


def velocity_teme_to_ecef(
    point: TEMEPoint, velocity: TEMEVelocity, instant: Instant
) -> CartesianVelocity:
    """Transform a TEME velocity to ECEF through PEF.

    Args:
        point (TEMEPoint): TEME position the velocity belongs to. Units: *m*
        velocity (TEMEVelocity): TEME velocity. Units: *m/s*
        instant (Instant): Time of the state (UTC).

    Returns:
        CartesianVelocity: ECEF velocity. Units: *m/s*
    """
    v_pef = velocity_teme_to_pef(point, velocity, instant)
    return velocity_pef_to_ecef(v_pef, instant)


def velocity_ecef_to_teme(
    point: CartesianPoint, velocity: CartesianVelocity, instant: Instant
) -> TEMEVelocity:
    """Transform an ECEF velocity to TEME through PEF.

    Args:
        point (CartesianPoint): ECEF position the velocity belongs to. Units: *m*
        velocity (CartesianVelocity): ECEF velocity. Units: *m/s*
        instant (Instant): Time of the state (UTC).

    Returns:
        TEMEVelocity: TEME velocity. Units: *m/s*
    """
    r_pef = ecef_to_pef(point, instant)
    v_pef = velocity_ecef_to_pef(velocity, instant)
    return velocity_pef_to_teme(r_pef, v_pef, instant)
