"""Immutable value types for points, velocities and geodesic solutions.

Every type is a :class:`typing.NamedTuple`, so JAX treats it as a pytree
and it passes through ``jax.jit`` and ``jax.vmap`` unchanged.  Fields hold
scalar JAX arrays, or equally shaped arrays for a batch of values.

Cartesian types share the same ``(x, y, z)`` shape but are distinct
classes tagged by reference frame, so an ECEF point cannot silently be
passed where a TEME point is expected by a reader of the code.
Local tangent-plane offsets (NED, ENU) are always relative to a
:class:`GeodeticPoint` reference held by the caller.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geodax.config import get_dtype


def as_vector(value: NamedTuple) -> Array:
    """Stack the fields of a three-component value type into a 3-vector."""
    return jnp.asarray(tuple(value), dtype=get_dtype())


def _validated_latitude(lat: ArrayLike) -> Array:
    lat = jnp.asarray(lat, dtype=get_dtype())
    if not bool(jnp.all(jnp.abs(lat) <= jnp.pi / 2.0 + 1e-12)):
        raise ValueError(
            f"Latitude must be within [-pi/2, pi/2] radians, got {lat.tolist()}"
        )
    return jnp.clip(lat, -jnp.pi / 2.0, jnp.pi / 2.0)


class GeodeticPoint(NamedTuple):
    """A point on or above the WGS84 ellipsoid.

    Attributes:
        lat (Array): Geodetic latitude. Units: *rad*
        lon (Array): Longitude, not range restricted. Units: *rad*
        height (Array): Height above the ellipsoid. Units: *m*
    """

    lat: Array
    lon: Array
    height: Array

    @classmethod
    def from_radians(
        cls, lat: ArrayLike, lon: ArrayLike, height: ArrayLike = 0.0
    ) -> GeodeticPoint:
        """Create a point from latitude and longitude in radians.

        Raises:
            ValueError: If ``lat`` is outside ``[-pi/2, pi/2]``.
        """
        dtype = get_dtype()
        return cls(
            _validated_latitude(lat),
            jnp.asarray(lon, dtype=dtype),
            jnp.asarray(height, dtype=dtype),
        )

    @classmethod
    def from_degrees(
        cls, lat: ArrayLike, lon: ArrayLike, height: ArrayLike = 0.0
    ) -> GeodeticPoint:
        """Create a point from latitude and longitude in degrees.

        Raises:
            ValueError: If ``lat`` is outside ``[-90, 90]``.
        """
        dtype = get_dtype()
        return cls.from_radians(
            jnp.deg2rad(jnp.asarray(lat, dtype=dtype)),
            jnp.deg2rad(jnp.asarray(lon, dtype=dtype)),
            height,
        )

    @property
    def lat_degrees(self) -> Array:
        """Latitude in degrees."""
        return jnp.rad2deg(self.lat)

    @property
    def lon_degrees(self) -> Array:
        """Longitude in degrees."""
        return jnp.rad2deg(self.lon)


class CartesianPoint(NamedTuple):
    """Earth-centred, Earth-fixed position. Units: *m*"""

    x: Array
    y: Array
    z: Array


class CartesianVelocity(NamedTuple):
    """Earth-centred, Earth-fixed velocity. Units: *m/s*"""

    vx: Array
    vy: Array
    vz: Array

    def speed(self) -> Array:
        """Magnitude of the velocity. Units: *m/s*"""
        return jnp.linalg.norm(as_vector(self))


class PEFPoint(NamedTuple):
    """Pseudo-Earth-fixed position (polar motion removed). Units: *m*"""

    x: Array
    y: Array
    z: Array


class PEFVelocity(NamedTuple):
    """Pseudo-Earth-fixed velocity. Units: *m/s*"""

    vx: Array
    vy: Array
    vz: Array


class TEMEPoint(NamedTuple):
    """True-equator mean-equinox position (polar motion and sidereal rotation removed). Units: *m*"""

    x: Array
    y: Array
    z: Array


class TEMEVelocity(NamedTuple):
    """True-equator mean-equinox velocity. Units: *m/s*"""

    vx: Array
    vy: Array
    vz: Array


class NEDPoint(NamedTuple):
    """North-east-down offset from a reference point. Units: *m*"""

    n: Array
    e: Array
    d: Array


class ENUPoint(NamedTuple):
    """East-north-up offset from a reference point. Units: *m*"""

    e: Array
    n: Array
    u: Array


class NEDVelocity(NamedTuple):
    """North-east-down velocity. Units: *m/s*"""

    vn: Array
    ve: Array
    vd: Array

    def speed(self) -> Array:
        """Magnitude of the velocity. Units: *m/s*"""
        return jnp.linalg.norm(as_vector(self))


class ENUVelocity(NamedTuple):
    """East-north-up velocity. Units: *m/s*"""

    ve: Array
    vn: Array
    vu: Array

    def speed(self) -> Array:
        """Magnitude of the velocity. Units: *m/s*"""
        return jnp.linalg.norm(as_vector(self))


class DistanceBearing(NamedTuple):
    """Solution of the inverse geodesic problem.

    Attributes:
        distance (Array): Length of the geodesic. Units: *m*
        bearing (Array): Initial bearing at the first point, clockwise from
            north in ``[0, 2pi)``. Units: *rad* (or *deg*)
        final_bearing (Array): Forward bearing at the second point.
    """

    distance: Array
    bearing: Array
    final_bearing: Array


class LocationBearing(NamedTuple):
    """Solution of the direct geodesic problem.

    Attributes:
        lat (Array): Destination latitude.
        lon (Array): Destination longitude, not range restricted.
        bearing (Array): Forward bearing at the destination, clockwise from
            north in ``[0, 2pi)``.
    """

    lat: Array
    lon: Array
    bearing: Array
