"""The instant module provides the ``Instant`` class, an absolute point in time.

An Instant is stored as an integer Julian day number and the seconds
elapsed since the start of that Julian day (noon), normalised to
``[0, 86400)``.  The split keeps sub-millisecond resolution that a single
float Julian date loses at magnitudes near 2.45e6.

The Instant class is registered as a JAX pytree, so it can be passed to
``jax.jit`` and ``jax.vmap``.  Arithmetic and comparison use JAX
operations; the calendar accessors and string forms extract concrete
Python values and are eager only.

All time-dependent geodax functions take an Instant explicitly; there is
no ambient clock.  UTC is treated as UT1.
"""

from __future__ import annotations

import datetime
import math

import jax
import jax.numpy as jnp

from .config import get_dtype, get_instant_eq_tolerance
from .constants import JD_MJD_OFFSET, SECONDS_PER_DAY
from .time import caldate_to_jd, jd_to_caldate


class Instant:
    """An absolute point in time with split Julian day representation.

    Constructors:
        Instant(2451545)                 # J2000.0, noon 2000-01-01
        Instant(2451544, 0.75)           # day number plus day fraction
        Instant.from_caldate(2018, 1, 1, 12, 0, 0.0)
        Instant.from_datetime(datetime.datetime(2018, 1, 1, 12))
        Instant.from_jd(2458120.0)
        Instant.from_mjd(58119.5)

    Supports ``instant + seconds``, ``instant - seconds``,
    ``instant - instant`` (elapsed seconds) and ordering comparisons.
    """

    __slots__ = ('_jd', '_seconds')

    def __init__(self, jd_day: int, day_fraction: float = 0.0) -> None:
        """Create an Instant from a Julian day number and a fraction of day.

        ``day_fraction`` may lie outside ``[0, 1)``; it is folded into the
        day number.

        Args:
            jd_day (int): Julian day number (days start at noon).
            day_fraction (float): Fraction of the day elapsed since noon.

        Raises:
            ValueError: If ``jd_day`` is not integral or either value is not finite.
        """
        if not math.isfinite(jd_day) or not math.isfinite(day_fraction):
            raise ValueError(
                f"Instant requires finite values, got jd_day={jd_day}, "
                f"day_fraction={day_fraction}"
            )
        if int(jd_day) != jd_day:
            raise ValueError(f"jd_day must be integral, got {jd_day}")

        self._jd, self._seconds = _normalized(
            jnp.int32(int(jd_day)),
            jnp.asarray(day_fraction * SECONDS_PER_DAY, dtype=get_dtype()),
        )

    @classmethod
    def _from_internal(cls, jd, seconds):
        """Create an Instant from already-normalised JAX arrays.

        Used by pytree unflatten and the arithmetic operators.
        """
        obj = object.__new__(cls)
        obj._jd = jd
        obj._seconds = seconds
        return obj

    @classmethod
    def from_caldate(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
    ) -> Instant:
        """Create an Instant from Gregorian calendar components (UTC).

        Args:
            year (int): Year, 1583 or later.
            month (int): Month, 1-12.
            day (int): Day of the month.
            hour (int): Hour. Default: 0
            minute (int): Minute. Default: 0
            second (float): Second, may include a fractional part. Default: 0.0

        Returns:
            Instant: The corresponding instant.

        Raises:
            ValueError: If a component is out of range.
        """
        if not 1 <= month <= 12:
            raise ValueError(f"month must be within 1-12, got {month}")
        if not 1 <= day <= 31:
            raise ValueError(f"day must be within 1-31, got {day}")

        # Midnight of the date sits half a day into a Julian day
        jd_midnight = float(caldate_to_jd(year, month, day))
        jd_int = int(math.floor(jd_midnight))
        seconds = ((jd_midnight - jd_int) * SECONDS_PER_DAY
                   + hour * 3600.0 + minute * 60.0 + second)

        jd, secs = _normalized(
            jnp.int32(jd_int), jnp.asarray(seconds, dtype=get_dtype())
        )
        return cls._from_internal(jd, secs)

    @classmethod
    def from_datetime(cls, value: datetime.datetime) -> Instant:
        """Create an Instant from a :class:`datetime.datetime`.

        Naive datetimes are taken as UTC; aware datetimes are converted to UTC.
        """
        if value.tzinfo is not None:
            value = value.astimezone(datetime.timezone.utc)
        return cls.from_caldate(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second + value.microsecond * 1e-6,
        )

    @classmethod
    def from_jd(cls, jd: float) -> Instant:
        """Create an Instant from a single Julian Date."""
        jd_int = math.floor(jd)
        return cls(jd_int, jd - jd_int)

    @classmethod
    def from_mjd(cls, mjd: float) -> Instant:
        """Create an Instant from a Modified Julian Date."""
        return cls.from_jd(mjd + JD_MJD_OFFSET)

    # Components

    @property
    def jd_day(self) -> jax.Array:
        """Integer Julian day number."""
        return self._jd

    @property
    def day_fraction(self) -> jax.Array:
        """Fraction of the Julian day elapsed since noon, in ``[0, 1)``."""
        return self._seconds / SECONDS_PER_DAY

    @property
    def seconds(self) -> jax.Array:
        """Seconds elapsed since the start of the Julian day, in ``[0, 86400)``."""
        return self._seconds

    # Arithmetic operators

    def __add__(self, delta) -> Instant:
        """Return a new Instant advanced by ``delta`` seconds."""
        jd, seconds = _normalized(
            self._jd, self._seconds + jnp.asarray(delta, dtype=get_dtype())
        )
        return Instant._from_internal(jd, seconds)

    def __radd__(self, delta) -> Instant:
        return self.__add__(delta)

    def __sub__(self, other):
        """Subtract seconds, or compute the seconds elapsed since another Instant."""
        if isinstance(other, Instant):
            days = jnp.asarray(self._jd - other._jd, dtype=get_dtype())
            return days * SECONDS_PER_DAY + (self._seconds - other._seconds)
        return self.__add__(-jnp.asarray(other, dtype=get_dtype()))

    # Comparison operators

    def __eq__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return jnp.abs(self - other) < get_instant_eq_tolerance()

    def __ne__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return ~self.__eq__(other)

    def __lt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return jnp.where(
            self._jd != other._jd,
            self._jd < other._jd,
            self._seconds < other._seconds,
        )

    def __le__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.__lt__(other) | self.__eq__(other)

    def __gt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return jnp.where(
            self._jd != other._jd,
            self._jd > other._jd,
            self._seconds > other._seconds,
        )

    def __ge__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.__gt__(other) | self.__eq__(other)

    # Time properties

    def jd(self) -> jax.Array:
        """Return the Julian Date as a single float.

        A single float64 near 2.45e6 resolves ~40 microseconds; use
        ``instant - other`` for precise elapsed times.
        """
        return jnp.asarray(self._jd, dtype=get_dtype()) + self.day_fraction

    def mjd(self) -> jax.Array:
        """Return the Modified Julian Date as a single float."""
        return (jnp.asarray(self._jd, dtype=get_dtype()) - JD_MJD_OFFSET) + self.day_fraction

    def caldate(self) -> tuple[int, int, int, int, int, float]:
        """Return the Gregorian calendar components (UTC).

        Extracts concrete Python values, so this is not traceable under
        ``jax.jit``.

        Returns:
            tuple: (year, month, day, hour, minute, second) where second
                includes the fractional part.
        """
        seconds = float(self._seconds)
        year, month, day, _, _, _ = jd_to_caldate(
            int(self._jd) + seconds / SECONDS_PER_DAY
        )

        # Julian days start at noon
        civil_time = (seconds + 43200.0) % SECONDS_PER_DAY

        hour = int(civil_time // 3600)
        civil_time -= hour * 3600
        minute = int(civil_time // 60)
        second = civil_time - minute * 60

        return int(year), int(month), int(day), hour, minute, second

    # String representations

    def __str__(self):
        year, month, day, hour, minute, second = self.caldate()
        return (f'{year:04d}-{month:02d}-{day:02d}T'
                f'{hour:02d}:{minute:02d}:{second:06.3f}Z')

    def __repr__(self):
        return f'Instant(jd_day={int(self._jd)}, day_fraction={float(self.day_fraction)!r})'

    def __hash__(self):
        return hash((int(self._jd), round(float(self._seconds), 3)))


def _normalized(jd, seconds):
    """Fold whole days out of ``seconds`` so it lies in ``[0, 86400)``."""
    day_offset = jnp.floor(seconds / SECONDS_PER_DAY)
    seconds = seconds - day_offset * SECONDS_PER_DAY
    return jd + day_offset.astype(jnp.int32), seconds


jax.tree_util.register_pytree_node(
    Instant,
    lambda i: ((i._jd, i._seconds), None),
    lambda _, children: Instant._from_internal(*children),
)
