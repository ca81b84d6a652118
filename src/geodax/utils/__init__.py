"""Shared utility functions for geodax.

Provides angle conversion and wrapping helpers.
"""

from geodax.utils._angle import from_radians, to_radians, wrap_to_2pi, wrap_to_pi

__all__ = [
    "from_radians",
    "to_radians",
    "wrap_to_2pi",
    "wrap_to_pi",
]
