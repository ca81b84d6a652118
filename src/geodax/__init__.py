"""
geodax is a geodesy library implemented in JAX: geodesic solvers on the WGS84 ellipsoid and transformations between geodetic, Earth-fixed, Earth-orientation and local tangent-plane frames.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    AS2RAD,
    JD_MJD_OFFSET,
    MJD2000,
    JD2000,
    SECONDS_PER_DAY,
    WGS84_a,
    WGS84_f,
    WGS84_b,
    ECC2,
    ECC2_PRIME,
    THIRD_FLATTENING,
    R_EARTH_MEAN,
    OMEGA_EARTH,
    LOD,
    OMEGA_EARTH_LOD,
)

from .config import (
    get_convergence_tolerance,
    get_dtype,
    get_max_iterations,
    set_dtype,
    set_max_iterations,
)
from .errors import (
    DegenerateInputError,
    GeodaxError,
    NonConvergenceError,
    SingularMatrixError,
)
from .instant import Instant
from .linalg import Rx, Ry, Rz, invert_matrix

from .types import (
    CartesianPoint,
    CartesianVelocity,
    DistanceBearing,
    ENUPoint,
    ENUVelocity,
    GeodeticPoint,
    LocationBearing,
    NEDPoint,
    NEDVelocity,
    PEFPoint,
    PEFVelocity,
    TEMEPoint,
    TEMEVelocity,
)

from .geodesics import (
    haversine_direct,
    haversine_inverse,
    karney_direct,
    karney_inverse,
    vincenty_direct,
    vincenty_inverse,
)

from .coordinates import (
    ecef_to_enu,
    ecef_to_geodetic,
    ecef_to_ned,
    enu_to_ecef,
    enu_to_geodetic,
    enu_to_ned,
    geodetic_to_ecef,
    geodetic_to_enu,
    geodetic_to_ned,
    ned_distance,
    ned_heading,
    ned_to_ecef,
    ned_to_enu,
    ned_to_geodetic,
    velocity_ecef_to_enu,
    velocity_ecef_to_ned,
    velocity_enu_to_ecef,
    velocity_from_ecef,
    velocity_from_ecef_dt,
    velocity_from_enu,
    velocity_from_geodetic,
    velocity_from_geodetic_dt,
    velocity_from_ned,
    velocity_ned_to_ecef,
)

from .frames import (
    ecef_to_pef,
    ecef_to_teme,
    gmst,
    pef_to_ecef,
    pef_to_teme,
    teme_to_ecef,
    teme_to_pef,
    velocity_ecef_to_pef,
    velocity_ecef_to_teme,
    velocity_pef_to_ecef,
    velocity_pef_to_teme,
    velocity_teme_to_ecef,
    velocity_teme_to_pef,
)
