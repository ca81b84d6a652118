"""Geodesic solvers on the WGS84 ellipsoid.

This sub-module provides two independent solutions of the direct problem
(start point, bearing, distance -> destination) and the inverse problem
(two points -> distance and bearings):

- **Vincenty**: iterative fixed-point solution on the auxiliary sphere.
- **Karney**: tenth-order series solution on the auxiliary sphere.

A spherical haversine approximation is included for quick estimates.
"""

from .haversine import haversine_direct, haversine_inverse
from .karney import karney_direct, karney_inverse
from .vincenty import vincenty_direct, vincenty_inverse

__all__ = [
    "haversine_direct",
    "haversine_inverse",
    "karney_direct",
    "karney_inverse",
    "vincenty_direct",
    "vincenty_inverse",
]
