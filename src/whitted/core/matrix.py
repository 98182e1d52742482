"""4x4 transformation matrices.

Matrices are float64 numpy arrays of shape (4, 4). Multiplication uses numpy;
the determinant and inverse are computed by cofactor expansion so that a
singular matrix is detected against an explicit tolerance instead of
surfacing as a LinAlgError or silently producing huge values.

Transform builders (rotations are left-handed, as in the scene files):
    translation(x, y, z), scaling(x, y, z), rotation_x/y/z(radians),
    shearing(xy, xz, yx, yz, zx, zy), view_transform(from, to, up)

Example:
    >>> from src.whitted.core.matrix import chain, rotation_x, scaling, translation
    >>> m = chain(rotation_x(0.5), scaling(5, 5, 5), translation(10, 5, 7))
    >>> # m applies the rotation first, then the scale, then the translation
"""

import math

import numpy as np
import numpy.typing as npt

from src.whitted.core.tuples import EPSILON, Tuple4, cross, magnitude, normalize

# Type alias for 4x4 matrices
Matrix4 = npt.NDArray[np.float64]


def identity() -> Matrix4:
    """Return a fresh 4x4 identity matrix."""
    return np.identity(4, dtype=np.float64)


def matrix(rows) -> npt.NDArray[np.float64]:
    """Build a float64 matrix from nested row sequences."""
    return np.array(rows, dtype=np.float64)


def multiply(a: Matrix4, b: Matrix4) -> Matrix4:
    """Multiply two matrices (``a @ b``)."""
    return a @ b


def transform(m: Matrix4, t: Tuple4) -> Tuple4:
    """Apply a matrix to a point or vector."""
    return m @ t


def transpose(m: Matrix4) -> Matrix4:
    """Return the transpose of a matrix as a new array."""
    return np.ascontiguousarray(m.T)


# =============================================================================
# Cofactor Expansion
# =============================================================================


def submatrix(m: npt.NDArray[np.float64], row: int, col: int) -> npt.NDArray[np.float64]:
    """Remove one row and one column from a matrix."""
    return np.delete(np.delete(m, row, axis=0), col, axis=1)


def minor(m: npt.NDArray[np.float64], row: int, col: int) -> float:
    """Determinant of the submatrix at (row, col)."""
    return determinant(submatrix(m, row, col))


def cofactor(m: npt.NDArray[np.float64], row: int, col: int) -> float:
    """Signed minor at (row, col)."""
    value = minor(m, row, col)
    return -value if (row + col) % 2 else value


def determinant(m: npt.NDArray[np.float64]) -> float:
    """Compute the determinant of a square matrix by cofactor expansion.

    Expands along the first row, recursing down to 2x2 matrices.

    Args:
        m: A square matrix of size 1 or more.

    Returns:
        The determinant.
    """
    size = m.shape[0]
    if size == 1:
        return float(m[0, 0])
    if size == 2:
        return float(m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0])
    return float(sum(m[0, col] * cofactor(m, 0, col) for col in range(size)))


# Relative singularity tolerance; |det| is measured against the product of the
# row lengths, its Hadamard bound.
SINGULAR_EPSILON = 1e-12


def _is_singular(m: npt.NDArray[np.float64], det: float, epsilon: float) -> bool:
    bound = float(np.prod(np.linalg.norm(m, axis=1)))
    return abs(det) <= epsilon * bound


def is_invertible(m: npt.NDArray[np.float64], epsilon: float = SINGULAR_EPSILON) -> bool:
    """Check whether a matrix has a usable inverse."""
    return not _is_singular(m, determinant(m), epsilon)


def inverse(m: npt.NDArray[np.float64], epsilon: float = SINGULAR_EPSILON) -> npt.NDArray[np.float64]:
    """Invert a matrix using the cofactor (adjugate) method.

    Args:
        m: The square matrix to invert.
        epsilon: Relative tolerance. The matrix is singular when its
            determinant is at most ``epsilon`` times the product of its row
            lengths.

    Returns:
        The inverse matrix.

    Raises:
        ValueError: If the matrix is singular. Every transform in a well-formed
            scene is invertible, so this points at a construction bug.
    """
    det = determinant(m)
    if _is_singular(m, det, epsilon):
        raise ValueError(f"Matrix is not invertible (determinant = {det})")

    size = m.shape[0]
    result = np.empty((size, size), dtype=np.float64)
    for row in range(size):
        for col in range(size):
            # Transposed placement gives the adjugate directly
            result[col, row] = cofactor(m, row, col) / det
    return result


# =============================================================================
# Transform Builders
# =============================================================================


def translation(x: float, y: float, z: float) -> Matrix4:
    """Translation matrix. Vectors are unaffected."""
    m = identity()
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m


def scaling(x: float, y: float, z: float) -> Matrix4:
    """Scaling matrix."""
    m = identity()
    m[0, 0] = x
    m[1, 1] = y
    m[2, 2] = z
    return m


def rotation_x(radians: float) -> Matrix4:
    """Rotation around the x axis (left-handed, as seen looking down +x)."""
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[1, 1] = c
    m[1, 2] = -s
    m[2, 1] = s
    m[2, 2] = c
    return m


def rotation_y(radians: float) -> Matrix4:
    """Rotation around the y axis."""
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[0, 0] = c
    m[0, 2] = s
    m[2, 0] = -s
    m[2, 2] = c
    return m


def rotation_z(radians: float) -> Matrix4:
    """Rotation around the z axis."""
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[0, 0] = c
    m[0, 1] = -s
    m[1, 0] = s
    m[1, 1] = c
    return m


def shearing(
    xy: float, xz: float, yx: float, yz: float, zx: float, zy: float
) -> Matrix4:
    """Shearing matrix.

    Each argument moves one coordinate in proportion to another, e.g. ``xy``
    moves x in proportion to y.
    """
    m = identity()
    m[0, 1] = xy
    m[0, 2] = xz
    m[1, 0] = yx
    m[1, 2] = yz
    m[2, 0] = zx
    m[2, 1] = zy
    return m


def chain(*transforms: Matrix4) -> Matrix4:
    """Compose transforms in application order.

    ``chain(a, b, c)`` returns ``c @ b @ a``: a point is transformed by ``a``
    first and by ``c`` last.
    """
    result = identity()
    for m in transforms:
        result = m @ result
    return result


class Transformable:
    """Mixin for objects that own a transform and its cached inverses.

    Assigning ``transform`` recomputes ``inverse`` and ``inverse_transpose``
    once, so ray and normal conversions never invert matrices per pixel.

    Attributes:
        transform: Object-to-parent (or object-to-world) matrix.
        inverse: Cached inverse of ``transform``.
        inverse_transpose: Cached transpose of ``inverse``, used for normals.
    """

    def __init__(self, transform: Matrix4 | None = None) -> None:
        self.transform = identity() if transform is None else transform

    @property
    def transform(self) -> Matrix4:
        return self._transform

    @transform.setter
    def transform(self, value: Matrix4) -> None:
        value = np.array(value, dtype=np.float64)
        self._inverse = inverse(value)
        self._inverse_transpose = transpose(self._inverse)
        self._transform = value

    @property
    def inverse(self) -> Matrix4:
        return self._inverse

    @property
    def inverse_transpose(self) -> Matrix4:
        return self._inverse_transpose


def view_transform(from_point: Tuple4, to_point: Tuple4, up: Tuple4) -> Matrix4:
    """Build the world-to-camera transform for an eye looking at a point.

    Args:
        from_point: Eye position.
        to_point: The point the eye looks at.
        up: Approximate up direction; need not be normalized or exactly
            perpendicular to the view direction.

    Returns:
        A matrix that moves the eye to the origin looking down -z.

    Raises:
        ValueError: If ``from_point`` equals ``to_point`` or ``up`` is
            parallel to the view direction.
    """
    forward = normalize(to_point - from_point)
    left = cross(forward, normalize(up))
    if magnitude(left) < EPSILON:
        raise ValueError("Up vector is parallel to the view direction")
    true_up = cross(left, forward)
    orientation = matrix(
        [
            [left[0], left[1], left[2], 0.0],
            [true_up[0], true_up[1], true_up[2], 0.0],
            [-forward[0], -forward[1], -forward[2], 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    return orientation @ translation(-from_point[0], -from_point[1], -from_point[2])
