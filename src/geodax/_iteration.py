"""Eager outcome checks for the ``jax.lax.while_loop`` solver kernels.

The kernels return their final iterate together with the iteration count
and the last change between iterates; they never raise.  The public
entry points hand those values to :func:`check_converged`, which logs the
outcome and raises :class:`~geodax.errors.NonConvergenceError` when the
cap was hit.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax.typing import ArrayLike

from geodax.config import get_convergence_tolerance
from geodax.errors import NonConvergenceError

logger = logging.getLogger(__name__)


def check_converged(solver: str, iterations: ArrayLike, residual: ArrayLike) -> None:
    """Raise if an iterative kernel stopped without meeting the tolerance.

    Args:
        solver (str): Human readable solver name for messages.
        iterations (ArrayLike): Iterations performed by the kernel.
        residual (ArrayLike): Change between the last two iterates, one
            per element for batched inputs. The largest one is checked and
            a non-finite residual counts as not converged.

    Raises:
        NonConvergenceError: If ``residual`` exceeds the convergence tolerance.
    """
    iterations = int(jnp.max(iterations))
    residual = float(jnp.max(residual))

    # Negated comparison so a NaN residual fails
    if not residual <= get_convergence_tolerance():
        logger.warning(
            "%s did not converge after %d iterations (residual %.3e)",
            solver, iterations, residual,
        )
        raise NonConvergenceError(
            f"{solver} did not converge after {iterations} iterations "
            f"(residual {residual:.3e})",
            iterations=iterations,
            residual=residual,
        )

    logger.debug("%s converged after %d iterations", solver, iterations)
