"""Tests for the Instant class."""

import datetime

import jax
import jax.numpy as jnp
import pytest

from geodax.instant import Instant


# ──────────────────────────────────────────────
# Construction
# ──────────────────────────────────────────────


class TestConstruction:
    def test_jd_day_only(self):
        t = Instant(2451545)
        assert int(t.jd_day) == 2451545
        assert float(t.day_fraction) == 0.0

    def test_day_fraction(self):
        t = Instant(2451544, 0.75)
        assert int(t.jd_day) == 2451544
        assert float(t.day_fraction) == pytest.approx(0.75, abs=1e-12)
        assert float(t.seconds) == pytest.approx(64800.0, abs=1e-9)

    def test_fraction_overflow_normalised(self):
        """A fraction above one rolls into the day number."""
        t = Instant(2451544, 1.25)
        assert int(t.jd_day) == 2451545
        assert float(t.day_fraction) == pytest.approx(0.25, abs=1e-12)

    def test_negative_fraction_normalised(self):
        t = Instant(2451545, -0.25)
        assert int(t.jd_day) == 2451544
        assert float(t.day_fraction) == pytest.approx(0.75, abs=1e-12)

    def test_non_integral_day_raises(self):
        with pytest.raises(ValueError, match="integral"):
            Instant(2451545.5)

    @pytest.mark.parametrize("jd_day, fraction", [(float("nan"), 0.0), (2451545, float("inf"))])
    def test_non_finite_raises(self, jd_day, fraction):
        with pytest.raises(ValueError, match="finite"):
            Instant(jd_day, fraction)

    def test_from_caldate_noon(self):
        t = Instant.from_caldate(2000, 1, 1, 12)
        assert int(t.jd_day) == 2451545
        assert float(t.seconds) == pytest.approx(0.0, abs=1e-9)

    def test_from_caldate_midnight(self):
        t = Instant.from_caldate(2000, 1, 1)
        assert int(t.jd_day) == 2451544
        assert float(t.seconds) == pytest.approx(43200.0, abs=1e-9)

    @pytest.mark.parametrize("month", [0, 13])
    def test_from_caldate_bad_month(self, month):
        with pytest.raises(ValueError, match="month"):
            Instant.from_caldate(2000, month, 1)

    @pytest.mark.parametrize("day", [0, 32])
    def test_from_caldate_bad_day(self, day):
        with pytest.raises(ValueError, match="day"):
            Instant.from_caldate(2000, 1, day)

    def test_from_datetime_naive(self):
        t = Instant.from_datetime(datetime.datetime(2018, 1, 1, 12, 0, 0))
        assert t == Instant.from_caldate(2018, 1, 1, 12)

    def test_from_datetime_aware(self):
        """Aware datetimes are converted to UTC before conversion."""
        tz = datetime.timezone(datetime.timedelta(hours=2))
        t = Instant.from_datetime(datetime.datetime(2018, 1, 1, 14, 0, 0, tzinfo=tz))
        assert t == Instant.from_caldate(2018, 1, 1, 12)

    def test_from_datetime_microseconds(self):
        t = Instant.from_datetime(datetime.datetime(2018, 1, 1, 12, 0, 0, 500000))
        assert float(t - Instant.from_caldate(2018, 1, 1, 12)) == pytest.approx(0.5, abs=1e-6)

    def test_from_jd(self):
        t = Instant.from_jd(2451545.25)
        assert int(t.jd_day) == 2451545
        assert float(t.day_fraction) == pytest.approx(0.25, abs=1e-9)

    def test_from_mjd(self):
        t = Instant.from_mjd(51544.5)
        assert t == Instant(2451545)


# ──────────────────────────────────────────────
# Arithmetic
# ──────────────────────────────────────────────


class TestArithmetic:
    def test_add_seconds(self):
        t = Instant(2451545) + 3600.0
        assert int(t.jd_day) == 2451545
        assert float(t.seconds) == pytest.approx(3600.0, abs=1e-9)

    def test_radd(self):
        assert 3600.0 + Instant(2451545) == Instant(2451545) + 3600.0

    def test_add_rolls_day(self):
        t = Instant(2451545) + 90000.0
        assert int(t.jd_day) == 2451546
        assert float(t.seconds) == pytest.approx(3600.0, abs=1e-9)

    def test_subtract_seconds(self):
        t = Instant(2451545) - 3600.0
        assert int(t.jd_day) == 2451544
        assert float(t.seconds) == pytest.approx(82800.0, abs=1e-9)

    def test_difference_seconds(self):
        a = Instant.from_caldate(2024, 3, 15, 6, 30, 0.0)
        b = Instant.from_caldate(2024, 3, 14, 6, 30, 0.0)
        assert float(a - b) == pytest.approx(86400.0, abs=1e-9)
        assert float(b - a) == pytest.approx(-86400.0, abs=1e-9)

    def test_sub_millisecond_resolution(self):
        """The split representation keeps microsecond steps exact near J2000."""
        t0 = Instant(2451545)
        t1 = t0 + 1e-6
        assert float(t1 - t0) == pytest.approx(1e-6, abs=1e-12)

    def test_add_then_subtract(self):
        t0 = Instant.from_caldate(2020, 6, 30, 23, 59, 59.0)
        assert (t0 + 12345.678) - 12345.678 == t0


# ──────────────────────────────────────────────
# Comparison
# ──────────────────────────────────────────────


class TestComparison:
    def test_equal(self):
        assert Instant(2451545) == Instant.from_jd(2451545.0)

    def test_equal_within_tolerance(self):
        assert Instant(2451545) == Instant(2451545) + 1e-10

    def test_not_equal(self):
        assert Instant(2451545) != Instant(2451545) + 1.0

    def test_ordering_same_day(self):
        a = Instant(2451545)
        b = a + 10.0
        assert a < b
        assert b > a
        assert a <= b
        assert b >= a

    def test_ordering_different_day(self):
        a = Instant(2451545, 0.9)
        b = Instant(2451546, 0.1)
        assert a < b
        assert not a > b

    def test_le_ge_equal(self):
        a = Instant(2451545, 0.5)
        assert a <= Instant(2451545, 0.5)
        assert a >= Instant(2451545, 0.5)

    def test_eq_other_type(self):
        assert Instant(2451545) != 2451545


# ──────────────────────────────────────────────
# Time properties
# ──────────────────────────────────────────────


class TestTimeProperties:
    def test_jd(self):
        assert float(Instant(2451545, 0.25).jd()) == pytest.approx(2451545.25, abs=1e-9)

    def test_mjd(self):
        assert float(Instant(2451545).mjd()) == pytest.approx(51544.5, abs=1e-9)

    def test_caldate_noon(self):
        year, month, day, hour, minute, second = Instant(2451545).caldate()
        assert (year, month, day, hour, minute) == (2000, 1, 1, 12, 0)
        assert second == pytest.approx(0.0, abs=1e-9)

    def test_caldate_roundtrip(self):
        t = Instant.from_caldate(2024, 3, 15, 6, 30, 45.25)
        year, month, day, hour, minute, second = t.caldate()
        assert (year, month, day, hour, minute) == (2024, 3, 15, 6, 30)
        assert second == pytest.approx(45.25, abs=1e-6)

    def test_caldate_returns_python_types(self):
        year, month, day, hour, minute, second = Instant(2451545).caldate()
        assert isinstance(year, int)
        assert isinstance(hour, int)
        assert isinstance(second, float)


# ──────────────────────────────────────────────
# String representation and hashing
# ──────────────────────────────────────────────


class TestStringAndHash:
    def test_str(self):
        assert str(Instant.from_caldate(2024, 3, 15, 6, 30, 45.5)) == "2024-03-15T06:30:45.500Z"

    def test_str_j2000(self):
        assert str(Instant(2451545)) == "2000-01-01T12:00:00.000Z"

    def test_repr(self):
        assert repr(Instant(2451545, 0.5)) == "Instant(jd_day=2451545, day_fraction=0.5)"

    def test_hash_equal_instants(self):
        a = Instant.from_caldate(2000, 1, 1, 12)
        b = Instant(2451545)
        assert hash(a) == hash(b)

    def test_usable_as_dict_key(self):
        d = {Instant(2451545): "j2000"}
        assert d[Instant.from_jd(2451545.0)] == "j2000"


# ──────────────────────────────────────────────
# JAX compatibility
# ──────────────────────────────────────────────


class TestJAXCompatibility:
    def test_pytree_roundtrip(self):
        t = Instant(2451545, 0.25)
        leaves, treedef = jax.tree_util.tree_flatten(t)
        assert len(leaves) == 2
        restored = jax.tree_util.tree_unflatten(treedef, leaves)
        assert restored == t

    def test_jit_add(self):
        @jax.jit
        def advance(t, dt):
            return t + dt

        t = advance(Instant(2451545), 90000.0)
        assert int(t.jd_day) == 2451546
        assert float(t.seconds) == pytest.approx(3600.0, abs=1e-9)

    def test_jit_difference(self):
        @jax.jit
        def elapsed(a, b):
            return a - b

        assert float(elapsed(Instant(2451546), Instant(2451545))) == pytest.approx(86400.0)

    def test_vmap_add(self):
        dts = jnp.array([0.0, 3600.0, 86400.0])
        result = jax.vmap(lambda dt: Instant(2451545) + dt)(dts)
        assert result.jd_day.shape == (3,)
        assert jnp.array_equal(result.jd_day, jnp.array([2451545, 2451545, 2451546]))
