"""ECEF <-> PEF transformations.

PEF (Pseudo Earth-Fixed) is the Earth-fixed frame with polar motion
removed.  The two frames share their rotation with the Earth, so the
velocity transform is the same rotation as the position transform.

The ECEF-to-PEF direction applies the explicit inverse of ``W.T`` (see
:func:`~geodax.frames.earth_orientation.polar_motion`), which raises
:class:`~geodax.errors.SingularMatrixError` if the matrix is degenerate.
"""

from __future__ import annotations

from geodax.frames.earth_orientation import polar_motion
from geodax.instant import Instant
from geodax.linalg import invert_matrix, matrix_times_vec, transpose, transpose_times_vec
from geodax.types import (
    CartesianPoint,
    CartesianVelocity,
    PEFPoint,
    PEFVelocity,
    as_vector,
)


def pef_to_ecef(point: PEFPoint, instant: Instant) -> CartesianPoint:
    """Transform a PEF position to ECEF, ``r_ecef = W.T @ r_pef``.

    Args:
        point (PEFPoint): PEF position. Units: *m*
        instant (Instant): Time of the position.

    Returns:
        CartesianPoint: ECEF position. Units: *m*
    """
    w = polar_motion(instant)
    return CartesianPoint(*transpose_times_vec(w, as_vector(point)))


def ecef_to_pef(point: CartesianPoint, instant: Instant) -> PEFPoint:
    """Transform an ECEF position to PEF, ``r_pef = inv(W.T) @ r_ecef``.

    Args:
        point (CartesianPoint): ECEF position. Units: *m*
        instant (Instant): Time of the position.

    Returns:
        PEFPoint: PEF position. Units: *m*

    Raises:
        SingularMatrixError: If the polar motion matrix cannot be inverted.
    """
    w_inv = invert_matrix(transpose(polar_motion(instant)))
    return PEFPoint(*matrix_times_vec(w_inv, as_vector(point)))


def velocity_pef_to_ecef(velocity: PEFVelocity, instant: Instant) -> CartesianVelocity:
    """Rotate a PEF velocity into ECEF.

    Args:
        velocity (PEFVelocity): PEF velocity. Units: *m/s*
        instant (Instant): Time of the velocity.

    Returns:
        CartesianVelocity: ECEF velocity. Units: *m/s*
    """
    w = polar_motion(instant)
    return CartesianVelocity(*transpose_times_vec(w, as_vector(velocity)))


def velocity_ecef_to_pef(velocity: CartesianVelocity, instant: Instant) -> PEFVelocity:
    """Rotate an ECEF velocity into PEF.

    Args:
        velocity (CartesianVelocity): ECEF velocity. Units: *m/s*
        instant (Instant): Time of the velocity.

    Returns:
        PEFVelocity: PEF velocity. Units: *m/s*
    """
    w_inv = invert_matrix(transpose(polar_motion(instant)))
    return PEFVelocity(*matrix_times_vec(w_inv, as_vector(velocity)))
