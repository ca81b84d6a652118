"""Tests for the Earth-orientation frames: GMST, polar motion, PEF and TEME."""

import math

import jax.numpy as jnp
import pytest

from geodax.constants import AS2RAD, OMEGA_EARTH_LOD, WGS84_a
from geodax.frames import (
    ecef_to_pef,
    ecef_to_teme,
    gmst,
    pef_to_ecef,
    pef_to_teme,
    polar_motion,
    polar_motion_angles,
    sidereal_rotation,
    teme_to_ecef,
    teme_to_pef,
    velocity_ecef_to_pef,
    velocity_ecef_to_teme,
    velocity_pef_to_ecef,
    velocity_pef_to_teme,
    velocity_teme_to_ecef,
    velocity_teme_to_pef,
)
from geodax.instant import Instant
from geodax.types import (
    CartesianPoint,
    CartesianVelocity,
    PEFPoint,
    PEFVelocity,
    TEMEPoint,
    TEMEVelocity,
    as_vector,
)

_POS_TOL = 1e-6  # m
_VEL_TOL = 1e-9  # m/s

_EPOCH = Instant.from_caldate(2024, 3, 15, 6, 30, 0.0)
_POINT = CartesianPoint(4045456.0, 713323.0, 4862789.0)
_LEO = TEMEPoint(-2510000.0, 4830000.0, 4260000.0)
_LEO_VEL = TEMEVelocity(-5360.0, -4170.0, 1580.0)


def _assert_close(a, b, atol):
    assert jnp.allclose(as_vector(a), as_vector(b), atol=atol, rtol=0.0), (a, b)


# ──────────────────────────────────────────────
# GMST
# ──────────────────────────────────────────────


class TestGMST:
    def test_j2000_noon(self):
        """At J2000.0 the polynomial reduces to its constant term."""
        assert float(gmst(Instant(2451545), use_degrees=True)) == pytest.approx(
            280.46061837, abs=1e-8
        )

    def test_j2000_midnight(self):
        t = Instant.from_caldate(2000, 1, 1)
        assert float(gmst(t, use_degrees=True)) == pytest.approx(99.96779, abs=1e-4)

    def test_radians_in_range(self):
        for days in range(0, 4000, 137):
            g = float(gmst(Instant(2451545 + days, 0.3)))
            assert 0.0 <= g < 2.0 * math.pi

    def test_sidereal_day(self):
        """GMST returns to the same value after one sidereal day."""
        t0 = Instant.from_caldate(2010, 6, 1)
        g0 = float(gmst(t0))
        g1 = float(gmst(t0 + 86164.0905))
        diff = (g1 - g0 + math.pi) % (2.0 * math.pi) - math.pi
        assert diff == pytest.approx(0.0, abs=1e-6)

    def test_sidereal_rotation_is_rz(self):
        s = sidereal_rotation(_EPOCH)
        g = gmst(_EPOCH)
        expected = jnp.array([
            [jnp.cos(g), -jnp.sin(g), 0.0],
            [jnp.sin(g), jnp.cos(g), 0.0],
            [0.0, 0.0, 1.0],
        ])
        assert jnp.allclose(s, expected, atol=1e-14)


# ──────────────────────────────────────────────
# Polar motion
# ──────────────────────────────────────────────


class TestPolarMotion:
    def test_reference_epoch(self):
        """At the model epoch every sine term vanishes."""
        xp, yp = polar_motion_angles(Instant.from_mjd(57226.0))
        assert float(xp) == pytest.approx(0.1824 * AS2RAD, abs=1e-15)
        assert float(yp) == pytest.approx(0.4246 * AS2RAD, abs=1e-15)

    def test_magnitude(self):
        """Pole offsets stay below one arcsecond."""
        for days in range(0, 3000, 91):
            xp, yp = polar_motion_angles(Instant.from_mjd(57226.0 + days))
            assert abs(float(xp)) < AS2RAD
            assert abs(float(yp)) < AS2RAD

    def test_matrix_orthonormal(self):
        w = polar_motion(_EPOCH)
        assert jnp.allclose(w @ w.T, jnp.eye(3), atol=1e-14)

    def test_matrix_close_to_identity(self):
        w = polar_motion(_EPOCH)
        assert jnp.allclose(w, jnp.eye(3), atol=1e-5)


# ──────────────────────────────────────────────
# ECEF <-> PEF
# ──────────────────────────────────────────────


class TestPEF:
    def test_roundtrip(self):
        pef = ecef_to_pef(_POINT, _EPOCH)
        _assert_close(pef_to_ecef(pef, _EPOCH), _POINT, _POS_TOL)

    def test_small_displacement(self):
        """Polar motion moves a surface point by metres, not kilometres."""
        pef = ecef_to_pef(_POINT, _EPOCH)
        shift = float(jnp.linalg.norm(as_vector(pef) - as_vector(_POINT)))
        assert 0.0 < shift < 25.0

    def test_preserves_norm(self):
        pef = ecef_to_pef(_POINT, _EPOCH)
        assert float(jnp.linalg.norm(as_vector(pef))) == pytest.approx(
            float(jnp.linalg.norm(as_vector(_POINT))), abs=_POS_TOL
        )

    def test_returns_pef_point(self):
        assert isinstance(ecef_to_pef(_POINT, _EPOCH), PEFPoint)
        assert isinstance(pef_to_ecef(PEFPoint(1.0, 2.0, 3.0), _EPOCH), CartesianPoint)

    def test_velocity_roundtrip(self):
        v = CartesianVelocity(10.0, -20.0, 5.0)
        v_pef = velocity_ecef_to_pef(v, _EPOCH)
        assert isinstance(v_pef, PEFVelocity)
        _assert_close(velocity_pef_to_ecef(v_pef, _EPOCH), v, _VEL_TOL)

    def test_velocity_same_rotation_as_position(self):
        v = CartesianVelocity(*_POINT)
        _assert_close(velocity_ecef_to_pef(v, _EPOCH), ecef_to_pef(_POINT, _EPOCH), _POS_TOL)


# ──────────────────────────────────────────────
# PEF <-> TEME
# ──────────────────────────────────────────────


class TestTEME:
    def test_roundtrip_pef(self):
        pef = teme_to_pef(_LEO, _EPOCH)
        _assert_close(pef_to_teme(pef, _EPOCH), _LEO, _POS_TOL)

    def test_roundtrip_ecef(self):
        ecef = teme_to_ecef(_LEO, _EPOCH)
        _assert_close(ecef_to_teme(ecef, _EPOCH), _LEO, _POS_TOL)

    def test_z_unchanged_by_sidereal_rotation(self):
        pef = teme_to_pef(_LEO, _EPOCH)
        assert float(pef.z) == pytest.approx(float(_LEO.z), abs=1e-9)

    def test_greenwich_at_gmst(self):
        """A PEF point on the prime meridian sits at right ascension GMST in TEME."""
        teme = pef_to_teme(PEFPoint(WGS84_a, 0.0, 0.0), _EPOCH)
        g = float(gmst(_EPOCH))
        assert math.atan2(float(teme.y), float(teme.x)) % (2.0 * math.pi) == pytest.approx(g, abs=1e-12)

    def test_velocity_roundtrip_pef(self):
        r_pef = teme_to_pef(_LEO, _EPOCH)
        v_pef = velocity_teme_to_pef(_LEO, _LEO_VEL, _EPOCH)
        _assert_close(velocity_pef_to_teme(r_pef, v_pef, _EPOCH), _LEO_VEL, _VEL_TOL)

    def test_velocity_roundtrip_ecef(self):
        r_ecef = teme_to_ecef(_LEO, _EPOCH)
        v_ecef = velocity_teme_to_ecef(_LEO, _LEO_VEL, _EPOCH)
        assert isinstance(v_ecef, CartesianVelocity)
        _assert_close(velocity_ecef_to_teme(r_ecef, v_ecef, _EPOCH), _LEO_VEL, 1e-8)

    def test_static_ecef_point_moves_in_teme(self):
        """A point fixed to the Earth moves at omega x r in TEME."""
        v_teme = velocity_ecef_to_teme(_POINT, CartesianVelocity(0.0, 0.0, 0.0), _EPOCH)
        r_teme = as_vector(ecef_to_teme(_POINT, _EPOCH))
        expected = jnp.cross(jnp.array([0.0, 0.0, OMEGA_EARTH_LOD]), r_teme)
        _assert_close(v_teme, expected, 1e-8)

    def test_corotating_teme_velocity_is_static_in_pef(self):
        r_teme = as_vector(_LEO)
        v_teme = TEMEVelocity(*jnp.cross(jnp.array([0.0, 0.0, OMEGA_EARTH_LOD]), r_teme))
        v_pef = velocity_teme_to_pef(_LEO, v_teme, _EPOCH)
        _assert_close(v_pef, PEFVelocity(0.0, 0.0, 0.0), 1e-9)

    def test_speed_change_bounded(self):
        """Earth rotation adds at most |omega x r| to the speed."""
        v_pef = velocity_teme_to_pef(_LEO, _LEO_VEL, _EPOCH)
        bound = OMEGA_EARTH_LOD * float(jnp.linalg.norm(as_vector(_LEO)))
        speed_pef = float(jnp.linalg.norm(as_vector(v_pef)))
        speed_teme = float(jnp.linalg.norm(as_vector(_LEO_VEL)))
        assert abs(speed_pef - speed_teme) <= bound + 1e-9
