"""Auxiliary-sphere helpers shared by the geodesic solvers."""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array

from geodax.config import get_convergence_tolerance
from geodax.constants import WGS84_f
from geodax.errors import DegenerateInputError

logger = logging.getLogger(__name__)

# Pairs closer than this to antipodal are rejected by the inverse solvers
ANTIPODAL_MARGIN = jnp.pi * WGS84_f


def reduced_latitude(lat: Array) -> tuple[Array, Array, Array]:
    """Reduced (parametric) latitude ``atan((1 - f) tan lat)``.

    Returns:
        tuple[Array, Array, Array]: ``(beta, sin(beta), cos(beta))``.
    """
    beta = jnp.arctan2((1.0 - WGS84_f) * jnp.sin(lat), jnp.cos(lat))
    return beta, jnp.sin(beta), jnp.cos(beta)


def spherical_arc(sin_b1, cos_b1, sin_b2, cos_b2, omega12) -> tuple[Array, Array]:
    """Solve the auxiliary-sphere triangle for a longitude difference ``omega12``.

    Returns:
        tuple[Array, Array]: ``(sigma12, alpha1)``, the arc length between
            the points and the azimuth at the first point.
    """
    z_re = cos_b1 * sin_b2 - sin_b1 * cos_b2 * jnp.cos(omega12)
    z_im = cos_b2 * jnp.sin(omega12)
    cos_sigma = sin_b1 * sin_b2 + cos_b1 * cos_b2 * jnp.cos(omega12)
    return jnp.arctan2(jnp.hypot(z_re, z_im), cos_sigma), jnp.arctan2(z_im, z_re)


def check_separation(solver: str, sin_b1, cos_b1, sin_b2, cos_b2, lam12) -> None:
    """Reject coincident and nearly antipodal point pairs.

    The separation is measured on the auxiliary sphere using the
    ellipsoidal longitude difference.  For batched inputs a single
    degenerate pair rejects the whole batch.

    Raises:
        DegenerateInputError: If the points coincide or lie within
            ``pi * f`` of being antipodal.
    """
    sigma, _ = spherical_arc(sin_b1, cos_b1, sin_b2, cos_b2, lam12)

    if bool(jnp.any(sigma <= get_convergence_tolerance())):
        logger.debug("%s rejected coincident points", solver)
        raise DegenerateInputError(
            f"{solver} is undefined for coincident points"
        )
    sigma = float(jnp.max(sigma))
    if sigma >= jnp.pi - ANTIPODAL_MARGIN:
        logger.debug("%s rejected nearly antipodal points (sigma=%.9f)", solver, sigma)
        raise DegenerateInputError(
            f"{solver} is unreliable for nearly antipodal points "
            f"(arc {sigma:.9f} rad)"
        )
