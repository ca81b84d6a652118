"""3x3 matrix and 3-vector primitives shared by the frame transforms.

Provides the elementary rotation matrices :func:`Rx`, :func:`Ry`,
:func:`Rz` (passive convention, Montenbruck & Gill), matrix-vector
products, and an analytic cofactor inverse that refuses singular input
instead of returning non-finite values.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from geodax.config import get_dtype, get_singular_tolerance
from geodax.errors import SingularMatrixError
from geodax.utils import to_radians

logger = logging.getLogger(__name__)


def Rx(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the x-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Interpret ``angle`` in degrees. Default: ``False``

    Returns:
        Array: 3x3 rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = to_radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)

    return jnp.array([[one, zero, zero],
                      [zero,  +c,   +s],
                      [zero,  -s,   +c]])


def Ry(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the y-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Interpret ``angle`` in degrees. Default: ``False``

    Returns:
        Array: 3x3 rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = to_radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)

    return jnp.array([[  +c, zero,   -s],
                      [zero,  one, zero],
                      [  +s, zero,   +c]])


def Rz(angle: ArrayLike, use_degrees: bool = False) -> Array:
    """Rotation matrix, for a rotation about the z-axis.

    Args:
        angle (ArrayLike): Counter-clockwise angle of rotation as viewed
            looking back along the positive direction of the rotation axis.
        use_degrees (bool): Interpret ``angle`` in degrees. Default: ``False``

    Returns:
        Array: 3x3 rotation matrix.

    References:

        1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and Applications*, 2012, p.27.
    """
    angle = to_radians(angle, use_degrees)

    c = jnp.cos(angle)
    s = jnp.sin(angle)
    one = jnp.ones_like(c)
    zero = jnp.zeros_like(c)

    return jnp.array([[  +c,   +s, zero],
                      [  -s,   +c, zero],
                      [zero, zero,  one]])


def matrix_times_vec(m: ArrayLike, v: ArrayLike) -> Array:
    """Multiply a 3x3 matrix by a 3-vector, ``m @ v``."""
    dtype = get_dtype()
    return jnp.asarray(m, dtype=dtype) @ jnp.asarray(v, dtype=dtype)


def transpose_times_vec(m: ArrayLike, v: ArrayLike) -> Array:
    """Multiply the transpose of a 3x3 matrix by a 3-vector, ``m.T @ v``."""
    dtype = get_dtype()
    return jnp.asarray(m, dtype=dtype).T @ jnp.asarray(v, dtype=dtype)


def transpose(m: ArrayLike) -> Array:
    """Return the transpose of a 3x3 matrix."""
    return jnp.asarray(m, dtype=get_dtype()).T


def determinant(m: ArrayLike) -> Array:
    """Determinant of a 3x3 matrix by cofactor expansion along the first row."""
    m = jnp.asarray(m, dtype=get_dtype())
    return (
        m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
        - m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0])
        + m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])
    )


def invert_matrix(m: ArrayLike) -> Array:
    """Invert a 3x3 matrix analytically via its adjugate.

    The matrix is rejected when its determinant is not finite, is zero, or
    is small relative to the cube of its largest element (see
    :func:`~geodax.config.get_singular_tolerance`).  The inverse of a
    singular matrix is never returned.

    Args:
        m (ArrayLike): 3x3 matrix.

    Returns:
        Array: The 3x3 inverse of ``m``.

    Raises:
        SingularMatrixError: If ``m`` is singular or numerically singular.

    Examples:
        ```python
        from geodax.linalg import Rz, invert_matrix
        r = Rz(0.3)
        r_inv = invert_matrix(r)  # equal to r.T for a rotation
        ```
    """
    m = jnp.asarray(m, dtype=get_dtype())
    det = determinant(m)
    scale = jnp.max(jnp.abs(m)) ** 3

    if not bool(jnp.isfinite(det)) or not bool(
        jnp.abs(det) > get_singular_tolerance() * scale
    ):
        logger.debug("Refusing to invert matrix with determinant %s", float(det))
        raise SingularMatrixError(
            f"Matrix is singular (determinant {float(det):.3e})",
            determinant=float(det),
        )

    # Adjugate: transpose of the cofactor matrix
    adj = jnp.array([
        [
            m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1],
            m[0, 2] * m[2, 1] - m[0, 1] * m[2, 2],
            m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1],
        ],
        [
            m[1, 2] * m[2, 0] - m[1, 0] * m[2, 2],
            m[0, 0] * m[2, 2] - m[0, 2] * m[2, 0],
            m[0, 2] * m[1, 0] - m[0, 0] * m[1, 2],
        ],
        [
            m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0],
            m[0, 1] * m[2, 0] - m[0, 0] * m[2, 1],
            m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0],
        ],
    ])

    return adj / det
