"""Coordinate transformations on and around the WGS84 ellipsoid.

This sub-module provides:

- **Geodetic**: ``GeodeticPoint`` <-> ECEF.
- **Local tangent plane**: ECEF <-> NED/ENU offsets from a reference
  point, the NED <-> ENU reordering, geodetic composites, velocity
  rotations and the local-plane distance and heading helpers.
- **Finite-difference velocities**: velocities from pairs of positions.
"""

from .geodetic import (
    ecef_to_geodetic,
    geodetic_to_ecef,
)
from .local_tangent import (
    ecef_to_enu,
    ecef_to_ned,
    enu_to_ecef,
    enu_to_geodetic,
    enu_to_ned,
    geodetic_to_enu,
    geodetic_to_ned,
    ned_distance,
    ned_heading,
    ned_to_ecef,
    ned_to_enu,
    jacobian_ecef_to_enu,
    jacobian_ecef_to_ned,
    ned_to_geodetic,
    rotation_ecef_to_enu,
    rotation_ecef_to_ned,
    rotation_enu_to_ecef,
    rotation_ned_to_ecef,
    velocity_ecef_to_enu,
    velocity_ecef_to_ned,
    velocity_enu_to_ecef,
    velocity_ned_to_ecef,
)
from .velocity import (
    velocity_from_ecef,
    velocity_from_ecef_dt,
    velocity_from_enu,
    velocity_from_geodetic,
    velocity_from_geodetic_dt,
    velocity_from_ned,
)

__all__ = [
    # Geodetic
    "ecef_to_geodetic",
    "geodetic_to_ecef",
    # Local tangent plane
    "ecef_to_enu",
    "ecef_to_ned",
    "enu_to_ecef",
    "enu_to_geodetic",
    "enu_to_ned",
    "geodetic_to_enu",
    "geodetic_to_ned",
    "ned_distance",
    "ned_heading",
    "ned_to_ecef",
    "ned_to_enu",
    "jacobian_ecef_to_enu",
    "jacobian_ecef_to_ned",
    "ned_to_geodetic",
    "rotation_ecef_to_enu",
    "rotation_ecef_to_ned",
    "rotation_enu_to_ecef",
    "rotation_ned_to_ecef",
    "velocity_ecef_to_enu",
    "velocity_ecef_to_ned",
    "velocity_enu_to_ecef",
    "velocity_ned_to_ecef",
    # Finite-difference velocities
    "velocity_from_ecef",
    "velocity_from_ecef_dt",
    "velocity_from_enu",
    "velocity_from_geodetic",
    "velocity_from_geodetic_dt",
    "velocity_from_ned",
]
