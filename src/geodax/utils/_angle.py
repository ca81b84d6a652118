"""Angle conversion and wrapping helpers.

These helpers implement the ``use_degrees`` convention used throughout
geodax, casting to the configured dtype, plus the range reductions
applied to longitudes and bearings.
"""

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geodax.config import get_dtype


def to_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Cast ``angle`` to the configured dtype, converting from degrees if requested.

    Args:
        angle (ArrayLike): Angle value.
        use_degrees (bool): If ``True``, treat ``angle`` as degrees and convert.

    Returns:
        Angle in radians.
    """
    angle = jnp.asarray(angle, dtype=get_dtype())
    return jnp.deg2rad(angle) if use_degrees else angle


def from_radians(angle: ArrayLike, use_degrees: bool) -> Array:
    """Convert an angle in radians to degrees if ``use_degrees`` is True.

    Args:
        angle (ArrayLike): Angle in radians.
        use_degrees (bool): If ``True``, convert to degrees.

    Returns:
        Angle in radians or degrees.
    """
    return jnp.rad2deg(angle) if use_degrees else angle


def wrap_to_pi(angle: ArrayLike) -> Array:
    """Reduce an angle in radians to ``[-pi, pi)``."""
    return wrap_to_2pi(jnp.asarray(angle) + jnp.pi) - jnp.pi


def wrap_to_2pi(angle: ArrayLike) -> Array:
    """Reduce an angle in radians to ``[0, 2pi)``."""
    wrapped = jnp.remainder(angle, 2.0 * jnp.pi)
    # remainder of a tiny negative angle rounds up to exactly 2pi
    return jnp.where(wrapped >= 2.0 * jnp.pi, 0.0, wrapped)
