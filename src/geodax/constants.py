"""
The `constants` module defines the WGS84 ellipsoid, Earth rotation, and angle and time conversion constants used by geodax.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

"""
Constant to convert arcseconds to radians. Equal to 2pi/(360*3600). Units: *rad/as*
"""
AS2RAD = 2.0 * PI / 360.0 / 3600.0

# Time Constants

"""
Offset between Julian Date and Modified Julian Date. Units: *days*
"""
JD_MJD_OFFSET = 2400000.5

"""
Modified Julian Date of the J2000.0 epoch (2000-01-01 12:00:00). Units: *days*
"""
MJD2000 = 51544.5

"""
Julian Date of the J2000.0 epoch (2000-01-01 12:00:00). Units: *days*
"""
JD2000 = 2451545.0

"""
Number of SI seconds in a day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

# WGS84 Ellipsoid
"""
Earth's semi-major axis as defined by the WGS84 geodetic system. [m]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0  # WGS-84 semi-major axis

"""
Earth's ellipsoidal flattening.  WGS84 Value.

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_f = 1.0 / 298.257223563  # WGS-84 flattening

"""
Earth's semi-minor (polar) axis, derived from ``WGS84_a`` and ``WGS84_f``. [m]
"""
WGS84_b = WGS84_a * (1.0 - WGS84_f)

"""
Square of the first eccentricity, ``f(2 - f)``. [dimensionless]
"""
ECC2 = WGS84_f * (2.0 - WGS84_f)

"""
Square of the second eccentricity, ``e^2 / (1 - e^2)``. [dimensionless]
"""
ECC2_PRIME = ECC2 / (1.0 - ECC2)

"""
Third flattening, ``f / (2 - f)``. [dimensionless]
"""
THIRD_FLATTENING = WGS84_f / (2.0 - WGS84_f)

"""
Mean Earth radius used by the spherical (haversine) approximation. [m]
"""
R_EARTH_MEAN = 6371e3

# Earth Rotation
"""
Earth axial rotation rate. [rad/s]

References:

1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, p. 222, 2010
"""
OMEGA_EARTH = 7.29211514670698e-5  # [rad/s] Vallado 4th Ed page 222

"""
Excess length of day used to correct the Earth rotation rate. [s]
"""
LOD = 0.002

"""
Earth rotation rate corrected for the excess length of day,
``OMEGA_EARTH * (1 - LOD / 86400)``. [rad/s]
"""
OMEGA_EARTH_LOD = OMEGA_EARTH * (1.0 - LOD / SECONDS_PER_DAY)
