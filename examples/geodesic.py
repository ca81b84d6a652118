# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "geodax"]
#
# [tool.uv.sources]
# geodax = { path = ".." }
# ///
"""Solve the geodesic problems between points with every geodax solver.

Runs the Vincenty and Karney ellipsoidal solvers side by side, together
with the spherical haversine estimate, and reports how far they disagree.

Requires geodax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/geodesic.py inverse LAT1 LON1 LAT2 LON2
    uv run examples/geodesic.py direct LAT LON BEARING DISTANCE

Examples:
    # Flinders Peak to Buninyong (Vincenty, 1975)
    uv run examples/geodesic.py inverse -- -37.951033417 144.424867889 -37.652821139 143.926495528

    # 1000 km north-east from Philadelphia
    uv run examples/geodesic.py direct 40.0 -75.0 45.0 1e6
"""

from typing import Annotated

import typer

from geodax import (
    DegenerateInputError,
    NonConvergenceError,
    haversine_direct,
    haversine_inverse,
    karney_direct,
    karney_inverse,
    vincenty_direct,
    vincenty_inverse,
)

app = typer.Typer(help="Ellipsoidal geodesic solvers on WGS84.")

_INVERSE_SOLVERS = {
    "vincenty": vincenty_inverse,
    "karney": karney_inverse,
    "haversine": haversine_inverse,
}

_DIRECT_SOLVERS = {
    "vincenty": vincenty_direct,
    "karney": karney_direct,
    "haversine": haversine_direct,
}


@app.command()
def inverse(
    lat1: Annotated[float, typer.Argument(help="First latitude in degrees")],
    lon1: Annotated[float, typer.Argument(help="First longitude in degrees")],
    lat2: Annotated[float, typer.Argument(help="Second latitude in degrees")],
    lon2: Annotated[float, typer.Argument(help="Second longitude in degrees")],
):
    """Distance and bearings between two points."""
    print(f"── Inverse: ({lat1}, {lon1}) -> ({lat2}, {lon2}) ──")
    results = {}
    for name, solver in _INVERSE_SOLVERS.items():
        try:
            sol = solver(lat1, lon1, lat2, lon2, use_degrees=True)
        except (DegenerateInputError, NonConvergenceError) as exc:
            print(f"  {name:<10} failed: {exc}")
            continue
        results[name] = sol
        print(
            f"  {name:<10} distance {float(sol.distance):15.4f} m   "
            f"bearing {float(sol.bearing):12.7f} deg   "
            f"final {float(sol.final_bearing):12.7f} deg"
        )

    if "vincenty" in results and "karney" in results:
        diff = abs(float(results["vincenty"].distance) - float(results["karney"].distance))
        print(f"\n  Vincenty - Karney distance difference: {diff * 1e3:.4f} mm")


@app.command()
def direct(
    lat: Annotated[float, typer.Argument(help="Start latitude in degrees")],
    lon: Annotated[float, typer.Argument(help="Start longitude in degrees")],
    bearing: Annotated[float, typer.Argument(help="Initial bearing in degrees")],
    distance: Annotated[float, typer.Argument(help="Distance to travel in metres")],
):
    """Destination reached from a start point, bearing and distance."""
    print(f"── Direct: ({lat}, {lon}) bearing {bearing} deg for {distance} m ──")
    for name, solver in _DIRECT_SOLVERS.items():
        try:
            dest = solver(lat, lon, bearing, distance, use_degrees=True)
        except NonConvergenceError as exc:
            print(f"  {name:<10} failed: {exc}")
            continue
        print(
            f"  {name:<10} lat {float(dest.lat):14.9f} deg   "
            f"lon {float(dest.lon):14.9f} deg   "
            f"bearing {float(dest.bearing):12.7f} deg"
        )


if __name__ == "__main__":
    app()
