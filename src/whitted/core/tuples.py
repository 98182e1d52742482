"""Points, vectors and colors as small numpy arrays.

A tuple is a float64 array of shape (4,). The fourth component ``w`` tells
points (``w == 1``) from vectors (``w == 0``). The arithmetic helpers in this
module enforce that discipline:

    point  - point  -> vector
    point  + vector -> point
    vector + vector -> vector
    point  + point  -> error
    vector - point  -> error

Hot loops elsewhere in the package use numpy operators directly on values
that are already known to be well formed; the checked helpers are the public
API for scene construction code.

Colors are float64 arrays of shape (3,) holding linear RGB.

Example:
    >>> from src.whitted.core.tuples import point, vector, normalize
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = normalize(vector(0.0, 0.0, 2.0))
    >>> p + v
    array([1., 2., 4., 1.])
"""

import math

import numpy as np
import numpy.typing as npt

# Type aliases
Tuple4 = npt.NDArray[np.float64]
Color = npt.NDArray[np.float64]

# Default tolerance for floating point comparisons
EPSILON = 1e-5


def _frozen(values: list[float]) -> npt.NDArray[np.float64]:
    array = np.array(values, dtype=np.float64)
    array.setflags(write=False)
    return array


# =============================================================================
# Construction
# =============================================================================


def tuple4(x: float, y: float, z: float, w: float) -> Tuple4:
    """Create a raw 4-component tuple."""
    return np.array([x, y, z, w], dtype=np.float64)


def point(x: float, y: float, z: float) -> Tuple4:
    """Create a point (w = 1)."""
    return np.array([x, y, z, 1.0], dtype=np.float64)


def vector(x: float, y: float, z: float) -> Tuple4:
    """Create a vector (w = 0)."""
    return np.array([x, y, z, 0.0], dtype=np.float64)


def color(red: float, green: float, blue: float) -> Color:
    """Create a linear RGB color."""
    return np.array([red, green, blue], dtype=np.float64)


def is_point(t: Tuple4, epsilon: float = EPSILON) -> bool:
    """Check whether a tuple is a point."""
    return abs(t[3] - 1.0) < epsilon


def is_vector(t: Tuple4, epsilon: float = EPSILON) -> bool:
    """Check whether a tuple is a vector."""
    return abs(t[3]) < epsilon


ORIGIN = _frozen([0.0, 0.0, 0.0, 1.0])
BLACK = _frozen([0.0, 0.0, 0.0])
WHITE = _frozen([1.0, 1.0, 1.0])


# =============================================================================
# Comparison
# =============================================================================


def approx_equal(a, b, epsilon: float = EPSILON) -> bool:
    """Compare two scalars or arrays component-wise within ``epsilon``.

    Args:
        a: First value (float or array).
        b: Second value, broadcastable against ``a``.
        epsilon: Absolute tolerance.

    Returns:
        True if every component differs by less than ``epsilon``.
    """
    return bool(np.all(np.abs(np.asarray(a) - np.asarray(b)) < epsilon))


# =============================================================================
# Checked Arithmetic
# =============================================================================


def add(a: Tuple4, b: Tuple4) -> Tuple4:
    """Add two tuples.

    Raises:
        ValueError: If both operands are points.
    """
    result = a + b
    if result[3] > 1.0 + EPSILON:
        raise ValueError("Cannot add a point to a point")
    return result


def subtract(a: Tuple4, b: Tuple4) -> Tuple4:
    """Subtract ``b`` from ``a``.

    Raises:
        ValueError: If a point is subtracted from a vector.
    """
    result = a - b
    if result[3] < -EPSILON:
        raise ValueError("Cannot subtract a point from a vector")
    return result


def negate(t: Tuple4) -> Tuple4:
    """Negate a vector.

    Raises:
        ValueError: If ``t`` is a point.
    """
    if not is_vector(t):
        raise ValueError("Only vectors can be negated")
    return -t


def multiply(t: Tuple4, scalar: float) -> Tuple4:
    """Scale the x, y, z components of a tuple, keeping w intact."""
    result = t * scalar
    result[3] = t[3]
    return result


def divide(t: Tuple4, scalar: float) -> Tuple4:
    """Divide the x, y, z components of a tuple, keeping w intact."""
    return multiply(t, 1.0 / scalar)


# =============================================================================
# Vector Operations
# =============================================================================


def magnitude(v: Tuple4) -> float:
    """Compute the Euclidean length of the xyz part of a tuple."""
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def normalize(v: Tuple4) -> Tuple4:
    """Scale a vector to unit length.

    Args:
        v: The vector to normalize.

    Returns:
        A unit vector in the same direction as ``v``.

    Raises:
        ValueError: If ``v`` has zero length. A zero vector here means the
            scene is malformed (coincident camera points, light placed on a
            surface, ...), so the error is raised where it happens.
    """
    length = magnitude(v)
    if length < 1e-12:
        raise ValueError("Cannot normalize a zero-length vector")
    return np.array([v[0] / length, v[1] / length, v[2] / length, 0.0], dtype=np.float64)


def dot(a: Tuple4, b: Tuple4) -> float:
    """Dot product over all four components."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2] + a[3] * b[3])


def cross(a: Tuple4, b: Tuple4) -> Tuple4:
    """Cross product of two vectors.

    Raises:
        ValueError: If either operand is a point.
    """
    if not (is_vector(a) and is_vector(b)):
        raise ValueError("Cross product is only defined for vectors")
    return vector(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def reflect(incident: Tuple4, normal: Tuple4) -> Tuple4:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - normal * (2.0 * dot(incident, normal))
