"""Vincenty's iterative solutions of the geodesic problems on WGS84.

Both problems are solved by fixed-point iteration on the auxiliary
sphere, implemented with ``jax.lax.while_loop``:

- **Direct**: iterate the arc length ``sigma`` from ``s / (b A)``.
- **Inverse**: iterate the auxiliary-sphere longitude ``lambda`` from the
  ellipsoidal longitude difference.

Iteration stops when successive iterates differ by less than
:func:`~geodax.config.get_convergence_tolerance` or the cap from
:func:`~geodax.config.get_max_iterations` is reached; the public
functions then raise :class:`~geodax.errors.NonConvergenceError`.
Vincenty's inverse iteration is known to fail for nearly antipodal
points, which are rejected up front.

References:
    1. T. Vincenty, *Direct and Inverse Solutions of Geodesics on the
       Ellipsoid with Application of Nested Equations*, Survey Review
       23(176), 1975.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geodax._iteration import check_converged
from geodax.config import get_convergence_tolerance, get_dtype, get_max_iterations
from geodax.constants import ECC2_PRIME, WGS84_b, WGS84_f
from geodax.errors import DegenerateInputError
from geodax.geodesics._auxiliary import check_separation, reduced_latitude
from geodax.types import DistanceBearing, LocationBearing
from geodax.utils import from_radians, to_radians, wrap_to_2pi, wrap_to_pi

logger = logging.getLogger(__name__)


def _series_ab(cos_sq_alpha: Array) -> tuple[Array, Array]:
    """Vincenty's A and B coefficients from ``u^2 = cos^2(alpha) e'^2``."""
    u_sq = cos_sq_alpha * ECC2_PRIME
    A = 1.0 + u_sq / 16384.0 * (4096.0 + u_sq * (-768.0 + u_sq * (320.0 - 175.0 * u_sq)))
    B = u_sq / 1024.0 * (256.0 + u_sq * (-128.0 + u_sq * (74.0 - 47.0 * u_sq)))
    return A, B


def _delta_sigma(B, sin_sigma, cos_sigma, cos_2sm) -> Array:
    return B * sin_sigma * (
        cos_2sm + B / 4.0 * (
            cos_sigma * (-1.0 + 2.0 * cos_2sm * cos_2sm)
            - B / 6.0 * cos_2sm
            * (-3.0 + 4.0 * sin_sigma * sin_sigma)
            * (-3.0 + 4.0 * cos_2sm * cos_2sm)
        )
    )


def _lambda_correction(cos_sq_alpha, sin_alpha, sigma, sin_sigma, cos_sigma, cos_2sm) -> Array:
    """Difference between auxiliary and ellipsoidal longitude, ``lambda - L``."""
    C = WGS84_f / 16.0 * cos_sq_alpha * (4.0 + WGS84_f * (4.0 - 3.0 * cos_sq_alpha))
    return (1.0 - C) * WGS84_f * sin_alpha * (
        sigma + C * sin_sigma * (cos_2sm + C * cos_sigma * (-1.0 + 2.0 * cos_2sm * cos_2sm))
    )


# ---------------------------------------------------------------------------
# Direct problem
# ---------------------------------------------------------------------------


def _direct_kernel(lat1, alpha1, distance, tol, max_iter):
    _, sin_u1, cos_u1 = reduced_latitude(lat1)
    sin_a1 = jnp.sin(alpha1)
    cos_a1 = jnp.cos(alpha1)

    sigma1 = jnp.arctan2(sin_u1, cos_u1 * cos_a1)
    sin_alpha = cos_u1 * sin_a1
    cos_sq_alpha = 1.0 - sin_alpha * sin_alpha
    A, B = _series_ab(cos_sq_alpha)

    sigma0 = distance / (WGS84_b * A)

    def cond(state):
        sigma, sigma_prev, i = state
        return jnp.any(jnp.abs(sigma - sigma_prev) > tol) & (i < max_iter)

    def body(state):
        sigma, _, i = state
        cos_2sm = jnp.cos(2.0 * sigma1 + sigma)
        step = _delta_sigma(B, jnp.sin(sigma), jnp.cos(sigma), cos_2sm)
        return (sigma0 + step, sigma, i + 1)

    init_state = (sigma0, jnp.full_like(sigma0, jnp.inf), jnp.int32(0))
    sigma, sigma_prev, iterations = jax.lax.while_loop(cond, body, init_state)

    sin_sigma = jnp.sin(sigma)
    cos_sigma = jnp.cos(sigma)
    cos_2sm = jnp.cos(2.0 * sigma1 + sigma)

    x = sin_u1 * sin_sigma - cos_u1 * cos_sigma * cos_a1
    lat2 = jnp.arctan2(
        sin_u1 * cos_sigma + cos_u1 * sin_sigma * cos_a1,
        (1.0 - WGS84_f) * jnp.sqrt(sin_alpha * sin_alpha + x * x),
    )
    lam = jnp.arctan2(sin_sigma * sin_a1, cos_u1 * cos_sigma - sin_u1 * sin_sigma * cos_a1)
    L = lam - _lambda_correction(cos_sq_alpha, sin_alpha, sigma, sin_sigma, cos_sigma, cos_2sm)
    alpha2 = jnp.arctan2(sin_alpha, -x)

    return lat2, L, alpha2, iterations, jnp.abs(sigma - sigma_prev)


def vincenty_direct(
    lat: ArrayLike,
    lon: ArrayLike,
    bearing: ArrayLike,
    distance: ArrayLike,
    use_degrees: bool = False,
) -> LocationBearing:
    """Solve the direct geodesic problem with Vincenty's method.

    Args:
        lat (ArrayLike): Start latitude. Units: *rad* (or *deg*)
        lon (ArrayLike): Start longitude. Units: *rad* (or *deg*)
        bearing (ArrayLike): Initial bearing, clockwise from north.
            Units: *rad* (or *deg*)
        distance (ArrayLike): Geodesic distance to travel. Units: *m*
        use_degrees (bool): Interpret and return angles in degrees.
            Default: ``False``

    Returns:
        LocationBearing: Destination latitude and longitude and the
            forward bearing there, in ``[0, 2pi)``.

    Raises:
        NonConvergenceError: If the arc-length iteration hits the cap.

    Examples:
        ```python
        from geodax.geodesics import vincenty_direct
        dest = vincenty_direct(-37.95103, 144.42487, 306.86816, 54972.271, use_degrees=True)
        ```
    """
    lat = to_radians(lat, use_degrees)
    lon = to_radians(lon, use_degrees)
    bearing = to_radians(bearing, use_degrees)
    distance = jnp.asarray(distance, dtype=get_dtype())
    lat, lon, bearing, distance = jnp.broadcast_arrays(lat, lon, bearing, distance)

    lat2, dlon, alpha2, iterations, residual = _direct_kernel(
        lat, bearing, distance, get_convergence_tolerance(), get_max_iterations()
    )
    check_converged("Vincenty direct", iterations, residual)

    return LocationBearing(
        from_radians(lat2, use_degrees),
        from_radians(lon + dlon, use_degrees),
        from_radians(wrap_to_2pi(alpha2), use_degrees),
    )


# ---------------------------------------------------------------------------
# Inverse problem
# ---------------------------------------------------------------------------


def _auxiliary_terms(sin_u1, cos_u1, sin_u2, cos_u2, lam):
    sin_lam = jnp.sin(lam)
    cos_lam = jnp.cos(lam)

    sin_sigma = jnp.hypot(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
    cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
    sigma = jnp.arctan2(sin_sigma, cos_sigma)

    sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
    cos_sq_alpha = 1.0 - sin_alpha * sin_alpha

    # Equatorial lines have cos^2(alpha) == 0
    equatorial = cos_sq_alpha == 0.0
    safe_cos_sq_alpha = jnp.where(equatorial, 1.0, cos_sq_alpha)
    cos_2sm = jnp.where(
        equatorial, 0.0, cos_sigma - 2.0 * sin_u1 * sin_u2 / safe_cos_sq_alpha
    )

    return sigma, sin_sigma, cos_sigma, sin_alpha, cos_sq_alpha, cos_2sm


def _inverse_kernel(sin_u1, cos_u1, sin_u2, cos_u2, L, tol, max_iter):
    def update(lam):
        sigma, sin_sigma, cos_sigma, sin_alpha, cos_sq_alpha, cos_2sm = _auxiliary_terms(
            sin_u1, cos_u1, sin_u2, cos_u2, lam
        )
        return L + _lambda_correction(
            cos_sq_alpha, sin_alpha, sigma, sin_sigma, cos_sigma, cos_2sm
        )

    def cond(state):
        lam, lam_prev, i = state
        return jnp.any(jnp.abs(lam - lam_prev) > tol) & (i < max_iter)

    def body(state):
        lam, _, i = state
        return (update(lam), lam, i + 1)

    init_state = (L, jnp.full_like(L, jnp.inf), jnp.int32(0))
    lam, lam_prev, iterations = jax.lax.while_loop(cond, body, init_state)

    sigma, sin_sigma, cos_sigma, _, cos_sq_alpha, cos_2sm = _auxiliary_terms(
        sin_u1, cos_u1, sin_u2, cos_u2, lam
    )
    A, B = _series_ab(cos_sq_alpha)
    distance = WGS84_b * A * (sigma - _delta_sigma(B, sin_sigma, cos_sigma, cos_2sm))

    sin_lam = jnp.sin(lam)
    cos_lam = jnp.cos(lam)
    alpha1 = jnp.arctan2(cos_u2 * sin_lam, cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam)
    alpha2 = jnp.arctan2(cos_u1 * sin_lam, -sin_u1 * cos_u2 + cos_u1 * sin_u2 * cos_lam)

    return distance, alpha1, alpha2, lam, iterations, jnp.abs(lam - lam_prev)


def vincenty_inverse(
    lat1: ArrayLike,
    lon1: ArrayLike,
    lat2: ArrayLike,
    lon2: ArrayLike,
    use_degrees: bool = False,
) -> DistanceBearing:
    """Solve the inverse geodesic problem with Vincenty's method.

    Args:
        lat1 (ArrayLike): First point latitude. Units: *rad* (or *deg*)
        lon1 (ArrayLike): First point longitude. Units: *rad* (or *deg*)
        lat2 (ArrayLike): Second point latitude. Units: *rad* (or *deg*)
        lon2 (ArrayLike): Second point longitude. Units: *rad* (or *deg*)
        use_degrees (bool): Interpret and return angles in degrees.
            Default: ``False``

    Returns:
        DistanceBearing: Geodesic distance in *m*, the initial bearing at
            the first point and the forward bearing at the second point,
            both in ``[0, 2pi)``.

    Raises:
        DegenerateInputError: If the points coincide or are nearly antipodal.
        NonConvergenceError: If the longitude iteration hits the cap.

    Examples:
        ```python
        from geodax.geodesics import vincenty_inverse
        sol = vincenty_inverse(50.06632, -5.71475, 58.64402, -3.07009, use_degrees=True)
        sol.distance  # ~969954 m, Land's End to John o' Groats
        ```
    """
    lat1 = to_radians(lat1, use_degrees)
    lon1 = to_radians(lon1, use_degrees)
    lat2 = to_radians(lat2, use_degrees)
    lon2 = to_radians(lon2, use_degrees)
    lat1, lon1, lat2, lon2 = jnp.broadcast_arrays(lat1, lon1, lat2, lon2)

    _, sin_u1, cos_u1 = reduced_latitude(lat1)
    _, sin_u2, cos_u2 = reduced_latitude(lat2)
    L = wrap_to_pi(lon2 - lon1)

    check_separation("Vincenty inverse", sin_u1, cos_u1, sin_u2, cos_u2, L)

    distance, alpha1, alpha2, lam, iterations, residual = _inverse_kernel(
        sin_u1, cos_u1, sin_u2, cos_u2, L,
        get_convergence_tolerance(), get_max_iterations(),
    )
    check_converged("Vincenty inverse", iterations, residual)

    lam = float(jnp.max(jnp.abs(lam)))
    if lam > jnp.pi:
        logger.debug("Vincenty inverse longitude left [-pi, pi] (lambda=%s)", lam)
        raise DegenerateInputError(
            "Vincenty inverse is unreliable for nearly antipodal points "
            f"(auxiliary longitude {lam:.9f} rad)"
        )

    return DistanceBearing(
        distance,
        from_radians(wrap_to_2pi(alpha1), use_degrees),
        from_radians(wrap_to_2pi(alpha2), use_degrees),
    )
