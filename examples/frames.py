# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "geodax"]
#
# [tool.uv.sources]
# geodax = { path = ".." }
# ///
"""Follow a moving target through the geodax reference-frame pipeline.

Places an observer at a geodetic location and a target that moves between
two geodetic positions over a time step, then prints the target in every
frame geodax supports (ECEF, PEF, TEME, NED, ENU), its finite-difference
velocity in each, and the local-plane range and heading from the observer.

Requires geodax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/frames.py [OPTIONS]

Examples:
    # Defaults: observer at 50N 10E, target climbing north-east
    uv run examples/frames.py

    # A different epoch and a longer step
    uv run examples/frames.py --epoch 2024-03-15T06:30:00 --dt 60
"""

import datetime
from typing import Annotated

import jax.numpy as jnp
import typer

from geodax import (
    GeodeticPoint,
    Instant,
    ecef_to_pef,
    ecef_to_teme,
    geodetic_to_ecef,
    geodetic_to_enu,
    geodetic_to_ned,
    ned_distance,
    ned_heading,
    velocity_ecef_to_ned,
    velocity_ecef_to_pef,
    velocity_ecef_to_teme,
    velocity_from_geodetic,
    velocity_from_ned,
)
from geodax.types import NEDPoint, as_vector


def _fmt(value) -> str:
    return "  ".join(f"{float(c):16.4f}" for c in as_vector(value))


def main(
    observer_lat: Annotated[float, typer.Option(help="Observer latitude in degrees")] = 50.0,
    observer_lon: Annotated[float, typer.Option(help="Observer longitude in degrees")] = 10.0,
    target_lat: Annotated[float, typer.Option(help="Target start latitude in degrees")] = 50.01,
    target_lon: Annotated[float, typer.Option(help="Target start longitude in degrees")] = 10.01,
    target_height: Annotated[float, typer.Option(help="Target start height in metres")] = 1000.0,
    epoch: Annotated[str, typer.Option(help="UTC epoch, ISO 8601")] = "2024-01-01T12:00:00",
    dt: Annotated[float, typer.Option(help="Time step in seconds")] = 10.0,
):
    observer = GeodeticPoint.from_degrees(observer_lat, observer_lon, 0.0)
    start = GeodeticPoint.from_degrees(target_lat, target_lon, target_height)
    # Target moves ~100 m north, ~100 m east and climbs 50 m over the step
    end = GeodeticPoint.from_degrees(
        target_lat + 100.0 / 111_200.0,
        target_lon + 100.0 / (111_320.0 * float(jnp.cos(start.lat))),
        target_height + 50.0,
    )

    t0 = Instant.from_datetime(datetime.datetime.fromisoformat(epoch))
    t1 = t0 + dt
    print(f"── Epoch {t0} -> {t1} ──")

    r_ecef = geodetic_to_ecef(start)
    v_ecef = velocity_from_geodetic(start, t0, end, t1)

    print("\n── Position ──")
    print(f"  ECEF  {_fmt(r_ecef)}")
    print(f"  PEF   {_fmt(ecef_to_pef(r_ecef, t0))}")
    print(f"  TEME  {_fmt(ecef_to_teme(r_ecef, t0))}")
    ned0 = geodetic_to_ned(start, observer)
    print(f"  NED   {_fmt(ned0)}")
    print(f"  ENU   {_fmt(geodetic_to_enu(start, observer))}")

    print("\n── Velocity ──")
    print(f"  ECEF  {_fmt(v_ecef)}")
    print(f"  PEF   {_fmt(velocity_ecef_to_pef(v_ecef, t0))}")
    print(f"  TEME  {_fmt(velocity_ecef_to_teme(r_ecef, v_ecef, t0))}")
    print(f"  NED   {_fmt(velocity_ecef_to_ned(v_ecef, observer))}")

    ned1 = geodetic_to_ned(end, observer)
    v_ned = velocity_from_ned(ned0, ned1, dt)
    print(f"  NED (differenced)  {_fmt(v_ned)}  speed {float(v_ned.speed()):.4f} m/s")

    print("\n── Observer view ──")
    origin = NEDPoint(0.0, 0.0, 0.0)
    print(f"  Range   {float(ned_distance(origin, ned0)):.3f} m")
    print(f"  Heading {float(ned_heading(origin, ned0, use_degrees=True)):.4f} deg")


if __name__ == "__main__":
    typer.run(main)
