"""North-East-Down (NED) and East-North-Up (ENU) local tangent-plane frames.

Converts between ECEF Cartesian coordinates and offsets in a local
tangent plane anchored at a reference :class:`~geodax.types.GeodeticPoint`.
The reference is a plain parameter: an offset carries no record of its
origin, so converting with a different reference than the one used to
produce it gives a silently wrong answer.

Both frames are right-handed:

- **NED**: north and east tangent to the ellipsoid, down along the inward normal.
- **ENU**: east and north tangent to the ellipsoid, up along the outward normal.

They differ by a fixed permutation and a sign flip on the vertical axis.

All inputs and outputs use SI base units (metres, radians).
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array

from geodax.coordinates.geodetic import ecef_to_geodetic, geodetic_to_ecef
from geodax.errors import DegenerateInputError
from geodax.linalg import matrix_times_vec, transpose_times_vec
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
from geodax.utils import wrap_to_2pi

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Rotation matrices
# ---------------------------------------------------------------------------


def rotation_ecef_to_ned(reference: GeodeticPoint) -> Array:
    """Compute the rotation matrix from ECEF to NED at ``reference``.

    Args:
        reference (GeodeticPoint): Origin of the local frame.

    Returns:
        3x3 rotation matrix (ECEF -> NED).

    Examples:
        ```python
        from geodax import GeodeticPoint
        from geodax.coordinates import rotation_ecef_to_ned
        rot = rotation_ecef_to_ned(GeodeticPoint.from_degrees(50.0, 10.0))
        ```
    """
    lat, lon, _ = as_vector(reference)

    sin_lon = jnp.sin(lon)
    cos_lon = jnp.cos(lon)
    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)

    # Rows are N, E, D basis vectors expressed in ECEF
    return jnp.array([
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],    # North
        [-sin_lon, cos_lon, jnp.zeros_like(cos_lon)],         # East
        [-cos_lat * cos_lon, -cos_lat * sin_lon, -sin_lat],   # Down
    ])


def rotation_ned_to_ecef(reference: GeodeticPoint) -> Array:
    """Compute the rotation matrix from NED to ECEF (transpose of ECEF -> NED)."""
    return rotation_ecef_to_ned(reference).T


def rotation_ecef_to_enu(reference: GeodeticPoint) -> Array:
    """Compute the rotation matrix from ECEF to ENU at ``reference``.

    Args:
        reference (GeodeticPoint): Origin of the local frame.

    Returns:
        3x3 rotation matrix (ECEF -> ENU).
    """
    ned = rotation_ecef_to_ned(reference)
    return jnp.stack([ned[1], ned[0], -ned[2]])


def rotation_enu_to_ecef(reference: GeodeticPoint) -> Array:
    """Compute the rotation matrix from ENU to ECEF (transpose of ECEF -> ENU)."""
    return rotation_ecef_to_enu(reference).T


def _block_diagonal(rot: Array) -> Array:
    zeros = jnp.zeros_like(rot)
    return jnp.block([[rot, zeros], [zeros, rot]])


def jacobian_ecef_to_ned(reference: GeodeticPoint) -> Array:
    """Compute the ECEF to NED Jacobian of a stacked ``[r; v]`` state.

    Position and velocity are rotated by the same matrix, so the Jacobian
    is block diagonal. It maps a 6x6 ECEF state covariance ``P`` to NED as
    ``J @ P @ J.T``.

    Args:
        reference (GeodeticPoint): Origin of the local frame.

    Returns:
        6x6 Jacobian (ECEF -> NED).

    Examples:
        ```python
        from geodax import GeodeticPoint
        from geodax.coordinates import jacobian_ecef_to_ned
        J = jacobian_ecef_to_ned(GeodeticPoint.from_degrees(50.0, 10.0))
        P_ned = J @ P_ecef @ J.T
        ```
    """
    return _block_diagonal(rotation_ecef_to_ned(reference))


def jacobian_ecef_to_enu(reference: GeodeticPoint) -> Array:
    """Compute the 6x6 ECEF to ENU Jacobian of a stacked ``[r; v]`` state."""
    return _block_diagonal(rotation_ecef_to_enu(reference))


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------


def ecef_to_ned(point: CartesianPoint, reference: GeodeticPoint) -> NEDPoint:
    """Express an ECEF point as a NED offset from ``reference``.

    Args:
        point (CartesianPoint): ECEF position. Units: *m*
        reference (GeodeticPoint): Origin of the local frame.

    Returns:
        NEDPoint: Offset from the reference. Units: *m*
    """
    delta = as_vector(point) - as_vector(geodetic_to_ecef(reference))
    return NEDPoint(*matrix_times_vec(rotation_ecef_to_ned(reference), delta))


def ned_to_ecef(ned: NEDPoint, reference: GeodeticPoint) -> CartesianPoint:
    """Convert a NED offset from ``reference`` back to an ECEF point.

    Args:
        ned (NEDPoint): Offset from the reference. Units: *m*
        reference (GeodeticPoint): Origin the offset was measured from.

    Returns:
        CartesianPoint: ECEF position. Units: *m*
    """
    r_ref = as_vector(geodetic_to_ecef(reference))
    r = r_ref + transpose_times_vec(rotation_ecef_to_ned(reference), as_vector(ned))
    return CartesianPoint(*r)


def ecef_to_enu(point: CartesianPoint, reference: GeodeticPoint) -> ENUPoint:
    """Express an ECEF point as an ENU offset from ``reference``.

    Args:
        point (CartesianPoint): ECEF position. Units: *m*
        reference (GeodeticPoint): Origin of the local frame.

    Returns:
        ENUPoint: Offset from the reference. Units: *m*
    """
    delta = as_vector(point) - as_vector(geodetic_to_ecef(reference))
    return ENUPoint(*matrix_times_vec(rotation_ecef_to_enu(reference), delta))


def enu_to_ecef(enu: ENUPoint, reference: GeodeticPoint) -> CartesianPoint:
    """Convert an ENU offset from ``reference`` back to an ECEF point.

    Args:
        enu (ENUPoint): Offset from the reference. Units: *m*
        reference (GeodeticPoint): Origin the offset was measured from.

    Returns:
        CartesianPoint: ECEF position. Units: *m*
    """
    r_ref = as_vector(geodetic_to_ecef(reference))
    r = r_ref + transpose_times_vec(rotation_ecef_to_enu(reference), as_vector(enu))
    return CartesianPoint(*r)


def ned_to_enu(ned: NEDPoint) -> ENUPoint:
    """Reorder a NED offset as ENU, ``(e, n, u) = (e, n, -d)``."""
    return ENUPoint(ned.e, ned.n, -ned.d)


def enu_to_ned(enu: ENUPoint) -> NEDPoint:
    """Reorder an ENU offset as NED, ``(n, e, d) = (n, e, -u)``."""
    return NEDPoint(enu.n, enu.e, -enu.u)


def geodetic_to_ned(point: GeodeticPoint, reference: GeodeticPoint) -> NEDPoint:
    """Express a geodetic point as a NED offset from ``reference`` via ECEF."""
    return ecef_to_ned(geodetic_to_ecef(point), reference)


def ned_to_geodetic(ned: NEDPoint, reference: GeodeticPoint) -> GeodeticPoint:
    """Convert a NED offset from ``reference`` to a geodetic point via ECEF.

    Raises:
        NonConvergenceError: If the geodetic latitude iteration fails.
    """
    return ecef_to_geodetic(ned_to_ecef(ned, reference))


def geodetic_to_enu(point: GeodeticPoint, reference: GeodeticPoint) -> ENUPoint:
    """Express a geodetic point as an ENU offset from ``reference`` via ECEF."""
    return ecef_to_enu(geodetic_to_ecef(point), reference)


def enu_to_geodetic(enu: ENUPoint, reference: GeodeticPoint) -> GeodeticPoint:
    """Convert an ENU offset from ``reference`` to a geodetic point via ECEF.

    Raises:
        NonConvergenceError: If the geodetic latitude iteration fails.
    """
    return ecef_to_geodetic(enu_to_ecef(enu, reference))


# ---------------------------------------------------------------------------
# Velocities
# ---------------------------------------------------------------------------


def velocity_ecef_to_ned(velocity: CartesianVelocity, reference: GeodeticPoint) -> NEDVelocity:
    """Rotate an ECEF velocity into the NED frame at ``reference``."""
    v = matrix_times_vec(rotation_ecef_to_ned(reference), as_vector(velocity))
    return NEDVelocity(*v)


def velocity_ned_to_ecef(velocity: NEDVelocity, reference: GeodeticPoint) -> CartesianVelocity:
    """Rotate a NED velocity at ``reference`` into ECEF."""
    v = transpose_times_vec(rotation_ecef_to_ned(reference), as_vector(velocity))
    return CartesianVelocity(*v)


def velocity_ecef_to_enu(velocity: CartesianVelocity, reference: GeodeticPoint) -> ENUVelocity:
    """Rotate an ECEF velocity into the ENU frame at ``reference``."""
    v = matrix_times_vec(rotation_ecef_to_enu(reference), as_vector(velocity))
    return ENUVelocity(*v)


def velocity_enu_to_ecef(velocity: ENUVelocity, reference: GeodeticPoint) -> CartesianVelocity:
    """Rotate an ENU velocity at ``reference`` into ECEF."""
    v = transpose_times_vec(rotation_ecef_to_enu(reference), as_vector(velocity))
    return CartesianVelocity(*v)


# ---------------------------------------------------------------------------
# Local plane helpers
# ---------------------------------------------------------------------------


def ned_distance(a: NEDPoint, b: NEDPoint) -> Array:
    """Straight-line distance between two NED offsets. Units: *m*"""
    return jnp.linalg.norm(as_vector(b) - as_vector(a))


def ned_heading(a: NEDPoint, b: NEDPoint, use_degrees: bool = False) -> Array:
    """Horizontal heading from ``a`` to ``b``, clockwise from north.

    Args:
        a (NEDPoint): Start offset.
        b (NEDPoint): End offset, measured from the same reference as ``a``.
        use_degrees (bool): If ``True``, return degrees. Default: ``False``

    Returns:
        Array: Heading in ``[0, 2pi)`` (or ``[0, 360)``).

    Raises:
        DegenerateInputError: If ``a`` and ``b`` have no horizontal separation.
    """
    dn = b.n - a.n
    de = b.e - a.e
    if bool(jnp.any((dn == 0) & (de == 0))):
        logger.debug("Heading requested between horizontally coincident points")
        raise DegenerateInputError(
            "Heading is undefined for points with no horizontal separation"
        )

    heading = wrap_to_2pi(jnp.arctan2(de, dn))
    return jnp.rad2deg(heading) if use_degrees else heading
