"""Calendar and Julian day conversions.

The Gregorian Montenbruck & Gill formula is the single authoritative
calendar-to-day-number computation in geodax; :class:`~geodax.instant.Instant`
is built on top of these functions.  The algorithms are only valid from
year 1583 onward.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
from jax.typing import ArrayLike

from .config import get_dtype
from .constants import JD_MJD_OFFSET, SECONDS_PER_DAY


def caldate_to_mjd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date to Modified Julian Date.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date, 1-12.
        day (ArrayLike): Day of the month.
        hour (ArrayLike): Hour of the day. Default: ``0``
        minute (ArrayLike): Minute of the hour. Default: ``0``
        second (ArrayLike): Second of the minute. Default: ``0.0``

    Returns:
        Modified Julian Date.

    Examples:
        ```python
        caldate_to_mjd(2000, 1, 1, 12)  # 51544.5
        ```

    References:

        1. Montenbruck, O., & Gill, E. (2012). *Satellite Orbits: Models, Methods and Applications*. Springer Science & Business Media.
    """
    # January and February count as months 13 and 14 of the previous year
    before_march = month <= 2
    year = jnp.where(before_march, year - 1, year)
    month = jnp.where(before_march, month + 12, month)

    leap_days = jnp.floor(year / 400) - jnp.floor(year / 100) + jnp.floor(year / 4)

    mjd_midnight = 365 * year - 679004 + leap_days + jnp.floor(30.6001 * (month + 1)) + day

    seconds_of_day = hour * 3600.0 + minute * 60.0 + second

    return jnp.asarray(mjd_midnight, dtype=get_dtype()) + seconds_of_day / SECONDS_PER_DAY


def caldate_to_jd(
    year: ArrayLike,
    month: ArrayLike,
    day: ArrayLike,
    hour: ArrayLike = 0,
    minute: ArrayLike = 0,
    second: ArrayLike = 0.0,
) -> jax.Array:
    """Convert a Gregorian calendar date to Julian Date.

    Args:
        year (ArrayLike): Year of the calendar date.
        month (ArrayLike): Month of the calendar date, 1-12.
        day (ArrayLike): Day of the month.
        hour (ArrayLike): Hour of the day. Default: ``0``
        minute (ArrayLike): Minute of the hour. Default: ``0``
        second (ArrayLike): Second of the minute. Default: ``0.0``

    Returns:
        Julian Date.
    """
    return caldate_to_mjd(year, month, day, hour, minute, second) + JD_MJD_OFFSET


def jd_to_mjd(jd: ArrayLike) -> jax.Array:
    """Convert Julian Date to Modified Julian Date."""
    return jd - JD_MJD_OFFSET


def mjd_to_jd(mjd: ArrayLike) -> jax.Array:
    """Convert Modified Julian Date to Julian Date."""
    return mjd + JD_MJD_OFFSET


def jd_to_caldate(
    jd: ArrayLike,
) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]:
    """Convert Julian Date to a Gregorian calendar date.

    Uses the inverse algorithm from Montenbruck & Gill with scaled integer
    arithmetic, so the integer part of the date is exact.

    Args:
        jd (ArrayLike): Julian Date.

    Returns:
        tuple[jax.Array, ...]: (year, month, day, hour, minute, second) where
            year/month/day/hour/minute are int32 and second uses the
            configured float dtype, resolved to the millisecond.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
           Applications*, 2012, p. 322.
    """
    jd_civil = jd + 0.5
    z = jnp.floor(jd_civil).astype(jnp.int32)
    frac = jd_civil - z

    # Gregorian correction, (z - 1867216.25) / 36524.25 in scaled integers
    alpha = (100 * z - 186721625) // 3652425
    a = z + 1 + alpha - alpha // 4

    b = a + 1524
    c = (100 * b - 12210) // 36525
    d = (36525 * c) // 100
    e = ((b - d) * 10000) // 306001

    day_with_frac = b - d - (306001 * e) // 10000 + frac
    day = jnp.floor(day_with_frac).astype(jnp.int32)
    frac_of_day = day_with_frac - day

    month = jnp.where(e < 14, e - 1, e - 13)
    year = jnp.where(month > 2, c - 4716, c - 4715)

    total_ms = jnp.round(frac_of_day * 86400000.0).astype(jnp.int32)
    hour = total_ms // 3600000
    total_ms = total_ms - hour * 3600000
    minute = total_ms // 60000
    total_ms = total_ms - minute * 60000
    second = jnp.asarray(total_ms, dtype=get_dtype()) / 1000.0

    return year, month, day, hour, minute, second


def mjd_to_caldate(
    mjd: ArrayLike,
) -> tuple[jax.Array, jax.Array, jax.Array, jax.Array, jax.Array, jax.Array]:
    """Convert Modified Julian Date to a Gregorian calendar date.

    Args:
        mjd (ArrayLike): Modified Julian Date.

    Returns:
        tuple[jax.Array, ...]: (year, month, day, hour, minute, second).
    """
    return jd_to_caldate(mjd + JD_MJD_OFFSET)
