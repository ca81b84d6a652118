"""Tests for Vincenty's direct and inverse geodesic solutions."""

import logging
import math

import jax.numpy as jnp
import pytest

from geodax.config import set_max_iterations
from geodax.constants import WGS84_a
from geodax.errors import DegenerateInputError, NonConvergenceError
from geodax.geodesics import vincenty_direct, vincenty_inverse
from geodax.types import DistanceBearing, LocationBearing

# Flinders Peak -> Buninyong, Vincenty (1975)
_FLINDERS = (-37.951033417, 144.424867889)
_BUNINYONG = (-37.652821139, 143.926495528)
_DISTANCE = 54972.271  # m
_BEARING = 306.8681583  # deg
_FINAL_BEARING = 307.1736306  # deg

_DIST_TOL = 0.01  # m
_BEARING_TOL = 2e-5  # deg
_LATLON_TOL = 1e-6  # deg

# Long lines and high latitudes
_LONG_LINES = [
    ((70.0, 0.0), (-60.0, 120.0)),
    ((80.0, -30.0), (85.0, 150.0)),
    ((-75.0, 10.0), (60.0, -100.0)),
    ((45.0, 0.0), (-40.0, 160.0)),
    ((0.0, 0.0), (20.0, 150.0)),
    ((89.0, 0.0), (-60.0, 90.0)),
]


# ──────────────────────────────────────────────
# Inverse
# ──────────────────────────────────────────────


class TestVincentyInverse:
    def test_flinders_buninyong(self):
        sol = vincenty_inverse(*_FLINDERS, *_BUNINYONG, use_degrees=True)
        assert isinstance(sol, DistanceBearing)
        assert float(sol.distance) == pytest.approx(_DISTANCE, abs=_DIST_TOL)
        assert float(sol.bearing) == pytest.approx(_BEARING, abs=_BEARING_TOL)
        assert float(sol.final_bearing) == pytest.approx(_FINAL_BEARING, abs=_BEARING_TOL)

    def test_radians(self):
        sol_deg = vincenty_inverse(*_FLINDERS, *_BUNINYONG, use_degrees=True)
        sol_rad = vincenty_inverse(*(math.radians(v) for v in _FLINDERS + _BUNINYONG))
        assert float(sol_rad.distance) == pytest.approx(float(sol_deg.distance), abs=1e-6)
        assert float(sol_rad.bearing) == pytest.approx(math.radians(float(sol_deg.bearing)), abs=1e-12)

    def test_equator(self):
        """Along the equator the geodesic is the equatorial arc."""
        sol = vincenty_inverse(0.0, 0.0, 0.0, 1.0, use_degrees=True)
        assert float(sol.distance) == pytest.approx(WGS84_a * math.pi / 180.0, abs=1e-6)
        assert float(sol.bearing) == pytest.approx(90.0, abs=1e-9)
        assert float(sol.final_bearing) == pytest.approx(90.0, abs=1e-9)

    def test_equator_westward(self):
        sol = vincenty_inverse(0.0, 0.0, 0.0, -1.0, use_degrees=True)
        assert float(sol.distance) == pytest.approx(WGS84_a * math.pi / 180.0, abs=1e-6)
        assert float(sol.bearing) == pytest.approx(270.0, abs=1e-9)

    def test_meridian(self):
        sol = vincenty_inverse(0.0, 0.0, 1.0, 0.0, use_degrees=True)
        assert float(sol.distance) == pytest.approx(110574.389, abs=1.0)
        assert float(sol.bearing) == pytest.approx(0.0, abs=1e-9)

    def test_southward_bearing(self):
        sol = vincenty_inverse(10.0, 20.0, 9.0, 20.0, use_degrees=True)
        assert float(sol.bearing) == pytest.approx(180.0, abs=1e-9)

    def test_bearings_in_range(self):
        sol = vincenty_inverse(*_BUNINYONG, *_FLINDERS, use_degrees=True)
        assert 0.0 <= float(sol.bearing) < 360.0
        assert 0.0 <= float(sol.final_bearing) < 360.0

    def test_symmetric_distance(self):
        forward = vincenty_inverse(*_FLINDERS, *_BUNINYONG, use_degrees=True)
        reverse = vincenty_inverse(*_BUNINYONG, *_FLINDERS, use_degrees=True)
        assert float(reverse.distance) == pytest.approx(float(forward.distance), abs=1e-6)
        # Reverse initial bearing is the forward final bearing turned around
        assert float(reverse.bearing) == pytest.approx(
            (float(forward.final_bearing) + 180.0) % 360.0, abs=1e-7
        )

    def test_antimeridian_crossing(self):
        """Longitude differences are taken the short way round."""
        sol = vincenty_inverse(0.0, 179.5, 0.0, -179.5, use_degrees=True)
        assert float(sol.distance) == pytest.approx(WGS84_a * math.pi / 180.0, abs=1e-6)
        assert float(sol.bearing) == pytest.approx(90.0, abs=1e-9)

    def test_long_equatorial_line(self):
        """177 degrees along the equator is still outside the antipodal margin."""
        sol = vincenty_inverse(0.0, 0.0, 0.0, 177.0, use_degrees=True)
        assert float(sol.distance) == pytest.approx(WGS84_a * math.radians(177.0), abs=1e-5)

    def test_coincident_raises(self):
        with pytest.raises(DegenerateInputError, match="coincident"):
            vincenty_inverse(10.0, 20.0, 10.0, 20.0, use_degrees=True)

    def test_coincident_across_antimeridian_raises(self):
        with pytest.raises(DegenerateInputError):
            vincenty_inverse(0.0, 180.0, 0.0, -180.0, use_degrees=True)

    @pytest.mark.parametrize(
        "p1, p2",
        [
            ((0.0, 0.0), (0.0, 180.0)),
            ((10.0, 0.0), (-10.0, 179.9)),
            ((45.0, 30.0), (-45.0, -150.0)),
        ],
    )
    def test_nearly_antipodal_raises(self, p1, p2):
        with pytest.raises(DegenerateInputError, match="antipodal"):
            vincenty_inverse(*p1, *p2, use_degrees=True)

    def test_degenerate_is_value_error(self):
        with pytest.raises(ValueError):
            vincenty_inverse(0.0, 0.0, 0.0, 0.0)

    def test_degenerate_logs_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="geodax.geodesics._auxiliary"):
            with pytest.raises(DegenerateInputError):
                vincenty_inverse(0.0, 0.0, 0.0, 0.0)
        assert "coincident" in caplog.text

    def test_iteration_cap(self):
        set_max_iterations(1)
        with pytest.raises(NonConvergenceError) as excinfo:
            vincenty_inverse(*_FLINDERS, *_BUNINYONG, use_degrees=True)
        assert excinfo.value.iterations == 1


# ──────────────────────────────────────────────
# Direct
# ──────────────────────────────────────────────


class TestVincentyDirect:
    def test_flinders_buninyong(self):
        dest = vincenty_direct(*_FLINDERS, _BEARING, _DISTANCE, use_degrees=True)
        assert isinstance(dest, LocationBearing)
        assert float(dest.lat) == pytest.approx(_BUNINYONG[0], abs=_LATLON_TOL)
        assert float(dest.lon) == pytest.approx(_BUNINYONG[1], abs=_LATLON_TOL)
        assert float(dest.bearing) == pytest.approx(_FINAL_BEARING, abs=_BEARING_TOL)

    def test_equator_east(self):
        dest = vincenty_direct(0.0, 0.0, 90.0, WGS84_a * math.pi / 180.0, use_degrees=True)
        assert float(dest.lat) == pytest.approx(0.0, abs=1e-9)
        assert float(dest.lon) == pytest.approx(1.0, abs=1e-9)
        assert float(dest.bearing) == pytest.approx(90.0, abs=1e-9)

    def test_meridian_north(self):
        dest = vincenty_direct(0.0, 0.0, 0.0, 110574.389, use_degrees=True)
        assert float(dest.lat) == pytest.approx(1.0, abs=1e-5)
        assert float(dest.lon) == pytest.approx(0.0, abs=1e-12)

    def test_zero_distance(self):
        dest = vincenty_direct(*_FLINDERS, 45.0, 0.0, use_degrees=True)
        assert float(dest.lat) == pytest.approx(_FLINDERS[0], abs=1e-12)
        assert float(dest.lon) == pytest.approx(_FLINDERS[1], abs=1e-12)

    def test_bearing_in_range(self):
        dest = vincenty_direct(10.0, 10.0, -45.0, 5.0e5, use_degrees=True)
        assert 0.0 <= float(dest.bearing) < 360.0

    def test_negative_bearing_equivalent(self):
        a = vincenty_direct(10.0, 10.0, -45.0, 5.0e5, use_degrees=True)
        b = vincenty_direct(10.0, 10.0, 315.0, 5.0e5, use_degrees=True)
        assert float(a.lat) == pytest.approx(float(b.lat), abs=1e-12)
        assert float(a.lon) == pytest.approx(float(b.lon), abs=1e-12)

    @pytest.mark.parametrize("p1, p2", _LONG_LINES)
    def test_long_line_roundtrip(self, p1, p2):
        inv = vincenty_inverse(*p1, *p2, use_degrees=True)
        dest = vincenty_direct(*p1, inv.bearing, inv.distance, use_degrees=True)
        assert float(dest.lat) == pytest.approx(p2[0], abs=1e-7)
        dlon = (float(dest.lon) - p2[1] + 180.0) % 360.0 - 180.0
        assert abs(dlon) < 1e-7

    def test_inverse_roundtrip(self):
        inv = vincenty_inverse(40.0, -75.0, 51.5, 0.0, use_degrees=True)
        dest = vincenty_direct(40.0, -75.0, inv.bearing, inv.distance, use_degrees=True)
        assert float(dest.lat) == pytest.approx(51.5, abs=1e-8)
        assert float(dest.lon) == pytest.approx(0.0, abs=1e-8)
        assert float(dest.bearing) == pytest.approx(float(inv.final_bearing), abs=1e-7)

    def test_iteration_cap(self):
        set_max_iterations(1)
        with pytest.raises(NonConvergenceError):
            vincenty_direct(*_FLINDERS, _BEARING, _DISTANCE, use_degrees=True)


# ──────────────────────────────────────────────
# Batched inputs
# ──────────────────────────────────────────────


class TestBatched:
    def test_inverse_matches_scalar(self):
        lat2 = [_BUNINYONG[0], -33.9, 0.0]
        lon2 = [_BUNINYONG[1], 151.2, 100.0]
        batch = vincenty_inverse(*_FLINDERS, jnp.array(lat2), jnp.array(lon2), use_degrees=True)
        assert batch.distance.shape == (3,)
        for i in range(3):
            single = vincenty_inverse(*_FLINDERS, lat2[i], lon2[i], use_degrees=True)
            assert float(batch.distance[i]) == pytest.approx(float(single.distance), abs=1e-6)
            assert float(batch.bearing[i]) == pytest.approx(float(single.bearing), abs=1e-9)

    def test_inverse_degenerate_member_raises(self):
        with pytest.raises(DegenerateInputError, match="coincident"):
            vincenty_inverse(
                *_FLINDERS,
                jnp.array([_BUNINYONG[0], _FLINDERS[0]]),
                jnp.array([_BUNINYONG[1], _FLINDERS[1]]),
                use_degrees=True,
            )

    def test_direct_matches_scalar(self):
        bearings = [_BEARING, 45.0, 200.0]
        distances = [_DISTANCE, 1.0e6, 5.0e6]
        batch = vincenty_direct(*_FLINDERS, jnp.array(bearings), jnp.array(distances), use_degrees=True)
        assert batch.lat.shape == (3,)
        assert float(batch.lat[0]) == pytest.approx(_BUNINYONG[0], abs=_LATLON_TOL)
        for i in range(3):
            single = vincenty_direct(*_FLINDERS, bearings[i], distances[i], use_degrees=True)
            assert float(batch.lat[i]) == pytest.approx(float(single.lat), abs=1e-10)
            assert float(batch.lon[i]) == pytest.approx(float(single.lon), abs=1e-10)
