"""Module-wide numerical configuration.

Holds the float dtype every geodax array is created with and the iteration
cap shared by the iterative solvers.
The default dtype is ``jnp.float64``: geodesic solutions converge to
``1e-12`` rad and the Earth-centred coordinates are ~6.4e6 m, both of
which are out of reach of single precision.  Importing this module enables
JAX's 64-bit mode (``jax_enable_x64``).

Settings are read when a function is traced, so a compiled function keeps
the dtype and iteration cap that were active at compile time.  Change them
at start-up, before anything is passed to ``jax.jit``.

Integer components (e.g. Instant ``_jd``) are always ``jnp.int32``
regardless of this setting.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_DEFAULT_MAX_ITERATIONS = 50

jax.config.update("jax_enable_x64", True)

_dtype = jnp.float64
_max_iterations = _DEFAULT_MAX_ITERATIONS


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for geodax.

    Takes effect immediately for eager calls; already compiled functions
    keep the dtype they were traced with.  Selecting ``jnp.float64`` turns
    JAX's 64-bit mode back on if it was disabled.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the float dtype geodax creates arrays with (default ``jnp.float64``)."""
    return _dtype


def set_max_iterations(max_iterations: int) -> None:
    """Set the iteration cap used by every iterative solver.

    Args:
        max_iterations (int): Maximum number of fixed-point iterations
            before a solver gives up and raises
            :class:`~geodax.errors.NonConvergenceError`.

    Raises:
        ValueError: If *max_iterations* is not a positive integer.
    """
    global _max_iterations
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int):
        raise ValueError(
            f"max_iterations must be an int, got {type(max_iterations).__name__}"
        )
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be positive, got {max_iterations}")
    _max_iterations = max_iterations


def get_max_iterations() -> int:
    """Return the iteration cap shared by the iterative solvers.

    Returns:
        int: Maximum number of iterations (default 50).
    """
    return _max_iterations


def get_convergence_tolerance() -> float:
    """Return the dtype-adaptive convergence tolerance of iterative solvers.

    The tolerance is the largest change between successive iterates
    (radians) at which a solver is considered converged:

    - ``float64``:  1e-12
    - ``float32``:  1e-6
    - ``float16``:  1e-3
    - ``bfloat16``: 1e-3

    Returns:
        float: Convergence tolerance in radians.
    """
    if _dtype == jnp.float64:
        return 1e-12
    if _dtype == jnp.float32:
        return 1e-6
    # float16 and bfloat16
    return 1e-3


def get_singular_tolerance() -> float:
    """Return the dtype-adaptive threshold for singular 3x3 matrices.

    A matrix is treated as singular when the magnitude of its determinant,
    relative to the cube of its largest element, falls below this value:

    - ``float64``:  1e-12
    - ``float32``:  1e-6
    - ``float16``:  1e-3
    - ``bfloat16``: 1e-3

    Returns:
        float: Relative determinant threshold.
    """
    if _dtype == jnp.float64:
        return 1e-12
    if _dtype == jnp.float32:
        return 1e-6
    return 1e-3


def get_instant_eq_tolerance() -> float:
    """Return the dtype-adaptive tolerance for Instant equality comparisons.

    Two instants closer than this are equal:

    - ``float64``:  1e-9 s
    - ``float32``:  1e-3 s
    - ``float16`` and ``bfloat16``: 0.1 s

    Returns:
        float: Tolerance in seconds.
    """
    if _dtype == jnp.float64:
        return 1e-9
    if _dtype == jnp.float32:
        return 1e-3
    # float16 and bfloat16
    return 0.1
