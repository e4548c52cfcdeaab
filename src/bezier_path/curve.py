from typing import NamedTuple, Union

import numpy as np
import numpy.typing as npt

from .config import DEFAULT_MAX_RECURSION, DEFAULT_PRECISION
from .handle import Handle

Parameter = Union[float, npt.ArrayLike]


# Cubic Bernstein basis, b1 weighs the start point and b4 the end point.
def b1(u: float) -> float:
    return (1 - u) * (1 - u) * (1 - u)


def b2(u: float) -> float:
    return 3 * u * (1 - u) * (1 - u)


def b3(u: float) -> float:
    return 3 * u * u * (1 - u)


def b4(u: float) -> float:
    return u * u * u


def bezier_point(
    u: float, p1: np.ndarray, p2: np.ndarray, p3: np.ndarray, p4: np.ndarray
) -> np.ndarray:
    """Calculates a point on a cubic Bézier curve from the Bernstein form."""
    return p1 * b1(u) + p2 * b2(u) + p3 * b3(u) + p4 * b4(u)


def de_casteljau(
    u: Parameter, p1: np.ndarray, p2: np.ndarray, p3: np.ndarray, p4: np.ndarray
) -> np.ndarray:
    """
    Evaluate a cubic Bézier curve by repeated linear interpolation.

    Args:
        u: Curve parameter in [0, 1], either a scalar or an array of parameters.
        p1, p2, p3, p4: Control points.

    Returns:
        A point of shape (3,) for a scalar u, or an array of shape (n, 3).
    """
    u = np.asarray(u, dtype=float)
    scalar = u.ndim == 0
    u = u[..., np.newaxis]

    p12 = p1 + (p2 - p1) * u
    p23 = p2 + (p3 - p2) * u
    p34 = p3 + (p4 - p3) * u
    p123 = p12 + (p23 - p12) * u
    p234 = p23 + (p34 - p23) * u
    point = p123 + (p234 - p123) * u

    return point.reshape(3) if scalar else point


def segment_points(
    handle1: Handle, handle2: Handle
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """The four control points of the segment running from handle1 to handle2."""
    return (
        handle1.position,
        handle1.right_control_point(),
        handle2.left_control_point(),
        handle2.position,
    )


def evaluate_at(handle1: Handle, handle2: Handle, u: Parameter) -> np.ndarray:
    """Point on the segment between two handles at an explicit curve parameter."""
    return de_casteljau(u, *segment_points(handle1, handle2))


class Subdivision(NamedTuple):
    value: float
    parameter: float
    depth: int


def intersect(a: float, b: float, precision: float) -> bool:
    return abs(a - b) <= precision


def subdivide(
    p1: np.ndarray,
    p2: np.ndarray,
    p3: np.ndarray,
    p4: np.ndarray,
    time: float,
    precision: float = DEFAULT_PRECISION,
    max_depth: int = DEFAULT_MAX_RECURSION,
    u1: float = 0.0,
    u2: float = 1.0,
    depth: int = 0,
) -> Subdivision:
    """
    Find the y value of a cubic segment at x == time by midpoint subdivision.

    Each call splits the curve at its parametric midpoint and descends into the
    half whose x range holds ``time``. The search assumes x is monotonic over
    the segment.

    Args:
        p1, p2, p3, p4: Control points of the (sub)segment.
        time: The x coordinate to look up.
        precision: Accept a point whose x is within this distance of time.
        max_depth: Stop splitting after this many calls.
        u1, u2: Parametric bounds of the subsegment on the original curve.
        depth: Number of calls made so far.

    Returns:
        The y value found, the curve parameter it sits at and the call depth.
    """
    p12 = (p1 + p2) * 0.5
    p23 = (p2 + p3) * 0.5
    p34 = (p3 + p4) * 0.5
    p234 = (p23 + p34) * 0.5
    p123 = (p12 + p23) * 0.5
    p1234 = (p123 + p234) * 0.5

    s = (u1 + u2) * 0.5
    depth += 1

    if depth >= max_depth or intersect(p1234[0], time, precision):
        return Subdivision(float(p1234[1]), s, depth)

    if intersect(p1[0], time, precision):
        return Subdivision(float(p1[1]), u1, depth)

    if intersect(p4[0], time, precision):
        return Subdivision(float(p4[1]), u2, depth)

    if time > p1234[0]:
        return subdivide(p1234, p234, p34, p4, time, precision, max_depth, s, u2, depth)
    return subdivide(p1, p12, p123, p1234, time, precision, max_depth, u1, s, depth)
