"""Exception types raised by geodax.

Every library-specific failure derives from :class:`GeodaxError`.  Each
concrete class also derives from the built-in exception a caller would
naturally catch for that failure, so ``except ValueError`` keeps working
for bad input and ``except RuntimeError`` for solver failures.
"""

from __future__ import annotations


class GeodaxError(Exception):
    """Base class for all geodax errors."""


class NonConvergenceError(GeodaxError, RuntimeError):
    """An iterative solver reached its iteration cap without converging.

    Attributes:
        iterations (int): Number of iterations performed.
        residual (float): Change between the last two iterates.
    """

    def __init__(self, message: str, iterations: int, residual: float) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.residual = residual


class SingularMatrixError(GeodaxError, ValueError):
    """A 3x3 matrix could not be inverted.

    Attributes:
        determinant (float): The offending determinant.
    """

    def __init__(self, message: str, determinant: float) -> None:
        super().__init__(message)
        self.determinant = determinant


class DegenerateInputError(GeodaxError, ValueError):
    """Input for which the requested quantity is undefined.

    Raised for coincident or nearly antipodal points passed to an inverse
    geodesic solver, and for a heading between two points with no
    horizontal separation.
    """
