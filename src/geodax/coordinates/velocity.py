"""Finite-difference velocities from pairs of positions.

Each function divides the displacement between two positions by the
elapsed time, assuming constant velocity (no acceleration) over the
interval.  Geodetic pairs are differenced in ECEF.  Elapsed time may be
given explicitly or as two :class:`~geodax.instant.Instant` values.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geodax.config import get_dtype
from geodax.coordinates.geodetic import geodetic_to_ecef
from geodax.instant import Instant
from geodax.types import (
    CartesianPoint,
    CartesianVelocity,
    ENUPoint,
    ENUVelocity,
    GeodeticPoint,
    NEDPoint,
    NEDVelocity,
    as_vector,
)


def _elapsed(dt: ArrayLike) -> Array:
    dt = jnp.asarray(dt, dtype=get_dtype())
    if not bool(jnp.all(dt != 0)):
        raise ValueError("Elapsed time between positions must be non-zero")
    return dt


def _rate(start: tuple, end: tuple, dt: ArrayLike) -> Array:
    return (as_vector(end) - as_vector(start)) / _elapsed(dt)


def velocity_from_ecef_dt(
    start: CartesianPoint, end: CartesianPoint, dt: ArrayLike
) -> CartesianVelocity:
    """ECEF velocity from two positions ``dt`` seconds apart.

    Args:
        start (CartesianPoint): Earlier ECEF position. Units: *m*
        end (CartesianPoint): Later ECEF position. Units: *m*
        dt (ArrayLike): Elapsed time, may be negative. Units: *s*

    Returns:
        CartesianVelocity: Mean velocity over the interval. Units: *m/s*

    Raises:
        ValueError: If ``dt`` is zero.
    """
    return CartesianVelocity(*_rate(start, end, dt))


def velocity_from_ecef(
    start: CartesianPoint, t_start: Instant, end: CartesianPoint, t_end: Instant
) -> CartesianVelocity:
    """ECEF velocity from two timestamped positions.

    Raises:
        ValueError: If the two instants coincide.
    """
    return velocity_from_ecef_dt(start, end, t_end - t_start)


def velocity_from_geodetic_dt(
    start: GeodeticPoint, end: GeodeticPoint, dt: ArrayLike
) -> CartesianVelocity:
    """ECEF velocity from two geodetic positions ``dt`` seconds apart.

    Raises:
        ValueError: If ``dt`` is zero.
    """
    return velocity_from_ecef_dt(geodetic_to_ecef(start), geodetic_to_ecef(end), dt)


def velocity_from_geodetic(
    start: GeodeticPoint, t_start: Instant, end: GeodeticPoint, t_end: Instant
) -> CartesianVelocity:
    """ECEF velocity from two timestamped geodetic positions.

    Raises:
        ValueError: If the two instants coincide.
    """
    return velocity_from_geodetic_dt(start, end, t_end - t_start)


def velocity_from_ned(start: NEDPoint, end: NEDPoint, dt: ArrayLike) -> NEDVelocity:
    """NED velocity from two offsets (same reference) ``dt`` seconds apart.

    Raises:
        ValueError: If ``dt`` is zero.
    """
    return NEDVelocity(*_rate(start, end, dt))


def velocity_from_enu(start: ENUPoint, end: ENUPoint, dt: ArrayLike) -> ENUVelocity:
    """ENU velocity from two offsets (same reference) ``dt`` seconds apart.

    Raises:
        ValueError: If ``dt`` is zero.
    """
    return ENUVelocity(*_rate(start, end, dt))
