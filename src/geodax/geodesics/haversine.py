"""Spherical (haversine) distance and bearing approximations.

Treats the Earth as a sphere of radius ``R_EARTH_MEAN``.  Errors against
the ellipsoidal solvers reach ~0.5 % of the distance, so these functions
are only meant as quick estimates and sanity references.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geodax.config import get_dtype
from geodax.constants import R_EARTH_MEAN
from geodax.types import DistanceBearing, LocationBearing
from geodax.utils import from_radians, to_radians, wrap_to_2pi


def _initial_bearing(lat1, lon1, lat2, lon2) -> Array:
    dlon = lon2 - lon1
    y = jnp.sin(dlon) * jnp.cos(lat2)
    x = jnp.cos(lat1) * jnp.sin(lat2) - jnp.sin(lat1) * jnp.cos(lat2) * jnp.cos(dlon)
    return wrap_to_2pi(jnp.arctan2(y, x))


def haversine_inverse(
    lat1: ArrayLike,
    lon1: ArrayLike,
    lat2: ArrayLike,
    lon2: ArrayLike,
    use_degrees: bool = False,
) -> DistanceBearing:
    """Great-circle distance and bearings between two points.

    Args:
        lat1 (ArrayLike): First point latitude. Units: *rad* (or *deg*)
        lon1 (ArrayLike): First point longitude. Units: *rad* (or *deg*)
        lat2 (ArrayLike): Second point latitude. Units: *rad* (or *deg*)
        lon2 (ArrayLike): Second point longitude. Units: *rad* (or *deg*)
        use_degrees (bool): Interpret and return angles in degrees.
            Default: ``False``

    Returns:
        DistanceBearing: Distance in *m*, initial bearing and forward
            bearing at the second point, both in ``[0, 2pi)``.
    """
    lat1 = to_radians(lat1, use_degrees)
    lon1 = to_radians(lon1, use_degrees)
    lat2 = to_radians(lat2, use_degrees)
    lon2 = to_radians(lon2, use_degrees)

    a = (jnp.sin((lat2 - lat1) / 2.0) ** 2
         + jnp.cos(lat1) * jnp.cos(lat2) * jnp.sin((lon2 - lon1) / 2.0) ** 2)
    c = 2.0 * jnp.arctan2(jnp.sqrt(a), jnp.sqrt(1.0 - a))

    bearing = _initial_bearing(lat1, lon1, lat2, lon2)
    final_bearing = wrap_to_2pi(_initial_bearing(lat2, lon2, lat1, lon1) + jnp.pi)

    return DistanceBearing(
        R_EARTH_MEAN * c,
        from_radians(bearing, use_degrees),
        from_radians(final_bearing, use_degrees),
    )


def haversine_direct(
    lat: ArrayLike,
    lon: ArrayLike,
    bearing: ArrayLike,
    distance: ArrayLike,
    use_degrees: bool = False,
) -> LocationBearing:
    """Destination along a great circle.

    Args:
        lat (ArrayLike): Start latitude. Units: *rad* (or *deg*)
        lon (ArrayLike): Start longitude. Units: *rad* (or *deg*)
        bearing (ArrayLike): Initial bearing. Units: *rad* (or *deg*)
        distance (ArrayLike): Distance to travel. Units: *m*
        use_degrees (bool): Interpret and return angles in degrees.
            Default: ``False``

    Returns:
        LocationBearing: Destination and the forward bearing there.
    """
    lat1 = to_radians(lat, use_degrees)
    lon1 = to_radians(lon, use_degrees)
    bearing = to_radians(bearing, use_degrees)
    delta = jnp.asarray(distance, dtype=get_dtype()) / R_EARTH_MEAN

    lat2 = jnp.arcsin(jnp.sin(lat1) * jnp.cos(delta)
                      + jnp.cos(lat1) * jnp.sin(delta) * jnp.cos(bearing))
    lon2 = lon1 + jnp.arctan2(
        jnp.sin(bearing) * jnp.sin(delta) * jnp.cos(lat1),
        jnp.cos(delta) - jnp.sin(lat1) * jnp.sin(lat2),
    )
    final_bearing = wrap_to_2pi(_initial_bearing(lat2, lon2, lat1, lon1) + jnp.pi)

    return LocationBearing(
        from_radians(lat2, use_degrees),
        from_radians(lon2, use_degrees),
        from_radians(final_bearing, use_degrees),
    )
