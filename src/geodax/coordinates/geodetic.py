"""Geodetic (WGS84 ellipsoid) coordinate transformations.

Converts between :class:`~geodax.types.GeodeticPoint` values
``(lat, lon, height)`` and Earth-Centered Earth-Fixed (ECEF) Cartesian
points ``(x, y, z)``.

The forward transformation is closed-form.  The inverse iterates the
latitude with ``jax.lax.while_loop`` from the seed
``atan2(z, p (1 - e^2))``, where ``p`` is the distance from the polar
axis, until successive latitudes differ by less than
:func:`~geodax.config.get_convergence_tolerance`.  Height is recovered
with a form that stays well conditioned at the poles.

All inputs and outputs use SI base units (metres, radians).

References:
    1. NIMA Technical Report TR8350.2, *Department of Defense World Geodetic
       System 1984*.
    2. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 5.3.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax import Array

from geodax._iteration import check_converged
from geodax.config import get_convergence_tolerance, get_dtype, get_max_iterations
from geodax.constants import ECC2, WGS84_a
from geodax.types import CartesianPoint, GeodeticPoint, as_vector


def _prime_vertical_radius(sin_lat: Array) -> Array:
    return WGS84_a / jnp.sqrt(1.0 - ECC2 * sin_lat * sin_lat)


def geodetic_to_ecef(point: GeodeticPoint) -> CartesianPoint:
    """Convert a geodetic point to ECEF Cartesian coordinates.

    Uses the WGS84 prime vertical radius of curvature:

    .. math::

        N = \\frac{a}{\\sqrt{1 - e^2 \\sin^2 \\phi}}

    Args:
        point (GeodeticPoint): Latitude and longitude in *rad*, height in
            *m* above the WGS84 ellipsoid.

    Returns:
        CartesianPoint: ECEF position in *m*.

    Example:
        >>> from geodax import GeodeticPoint, geodetic_to_ecef
        >>> p = geodetic_to_ecef(GeodeticPoint.from_degrees(0.0, 0.0))
        >>> float(p.x)  # WGS84_a on the equator
        6378137.0
    """
    lat, lon, height = as_vector(point)

    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)
    N = _prime_vertical_radius(sin_lat)

    x = (N + height) * cos_lat * jnp.cos(lon)
    y = (N + height) * cos_lat * jnp.sin(lon)
    z = ((1.0 - ECC2) * N + height) * sin_lat

    return CartesianPoint(x, y, z)


def _latitude_kernel(p, z, tol, max_iter):
    """Fixed-point latitude iteration. Returns (lat, iterations, residual)."""
    lat0 = jnp.arctan2(z, p * (1.0 - ECC2))

    def cond(state):
        lat, lat_prev, i = state
        return jnp.any(jnp.abs(lat - lat_prev) > tol) & (i < max_iter)

    def body(state):
        lat, _, i = state
        sin_lat = jnp.sin(lat)
        N = _prime_vertical_radius(sin_lat)
        return (jnp.arctan2(z + ECC2 * N * sin_lat, p), lat, i + 1)

    # Force the first iteration with an infinite previous latitude
    init_state = (lat0, jnp.full_like(lat0, jnp.inf), jnp.int32(0))
    lat, lat_prev, iterations = jax.lax.while_loop(cond, body, init_state)

    return lat, iterations, jnp.abs(lat - lat_prev)


def ecef_to_geodetic(point: CartesianPoint) -> GeodeticPoint:
    """Convert ECEF Cartesian coordinates to a geodetic point.

    Points on the polar axis (``p == 0``) resolve immediately to latitude
    ``+-pi/2``.

    Args:
        point (CartesianPoint): ECEF position in *m*.

    Returns:
        GeodeticPoint: Latitude and longitude in *rad*, height in *m*.

    Raises:
        NonConvergenceError: If the latitude iteration hits the cap from
            :func:`~geodax.config.get_max_iterations`.

    Example:
        >>> from geodax import CartesianPoint, ecef_to_geodetic
        >>> from geodax.constants import WGS84_a
        >>> g = ecef_to_geodetic(CartesianPoint(WGS84_a, 0.0, 0.0))
        >>> float(g.height)
        0.0
    """
    x, y, z = as_vector(point)
    p = jnp.sqrt(x * x + y * y)

    lat, iterations, residual = _latitude_kernel(
        p, z, get_convergence_tolerance(), get_max_iterations()
    )
    check_converged("ECEF to geodetic latitude iteration", iterations, residual)

    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)
    height = (p * cos_lat + z * sin_lat
              - WGS84_a * jnp.sqrt(1.0 - ECC2 * sin_lat * sin_lat))

    return GeodeticPoint(lat, jnp.arctan2(y, x), height)
