"""
Tangent derivation passes.

Every pass is a pure function over an (n, 3) array of handle positions (or
tangents) and returns new arrays; ``Path`` writes the results back into its
handles.
"""

from typing import Optional, Tuple

import numpy as np

from .vec3 import Z_AXIS, cross, magnitude, normal, normalize

Tangents = Tuple[np.ndarray, np.ndarray]


def neighbor(index: int, offset: int, count: int, loop: bool) -> Optional[int]:
    """
    Index of the handle ``offset`` steps away from ``index``.

    Returns None when the neighbor falls off an open path. On a looped path the
    index wraps around, so the last handle's next is the first handle.
    """
    target = index + offset
    if 0 <= target < count:
        return target
    if loop and count > 0:
        return target % count
    return None


def _segments(positions: np.ndarray, index: int, loop: bool):
    count = len(positions)
    current = positions[index]
    prior = neighbor(index, -1, count, loop)
    next_ = neighbor(index, 1, count, loop)

    seg_in = current - positions[prior] if prior is not None else np.zeros(3)
    seg_out = positions[next_] - current if next_ is not None else np.zeros(3)
    start = positions[prior] if prior is not None else current
    end = positions[next_] if next_ is not None else current
    return prior, next_, seg_in, seg_out, start, end


def smooth(
    positions: np.ndarray, loop: bool = False, plane_normal: np.ndarray = Z_AXIS
) -> Tangents:
    """
    Derive left and right tangents from each handle's neighbors.

    The tangent direction is the in-plane perpendicular of the chord joining the
    two neighbors; each side is scaled to half of its adjacent segment length.

    Args:
        positions: Handle positions, shape (n, 3).
        loop: Treat the path as closed.
        plane_normal: Normal of the working plane.

    Returns:
        Left and right tangents, each of shape (n, 3).
    """
    positions = np.asarray(positions, dtype=float)
    left = np.zeros_like(positions)
    right = np.zeros_like(positions)

    for i in range(len(positions)):
        _, _, seg_in, seg_out, start, end = _segments(positions, i, loop)
        direction = normal(end - start, plane_normal)
        left[i] = -direction * (magnitude(seg_in) * 0.5)
        right[i] = direction * (magnitude(seg_out) * 0.5)

    return left, right


def smooth_auto(
    positions: np.ndarray, loop: bool = False, plane_normal: np.ndarray = Z_AXIS
) -> Tangents:
    """
    Like ``smooth`` but the longer adjacent segment is clamped to the length of
    the shorter one before building the chord, and both tangents take the
    shorter length. Keeps the curve from overshooting next to uneven spacing.
    """
    positions = np.asarray(positions, dtype=float)
    left = np.zeros_like(positions)
    right = np.zeros_like(positions)

    for i in range(len(positions)):
        prior, next_, seg_in, seg_out, start, end = _segments(positions, i, loop)
        current = positions[i]
        in_length = magnitude(seg_in)
        out_length = magnitude(seg_out)

        # Only clamp when both sides exist
        if prior is not None and next_ is not None:
            if in_length < out_length:
                end = current + normalize(seg_out) * in_length
                out_length = in_length
            elif in_length > out_length:
                start = current - normalize(seg_in) * out_length
                in_length = out_length

        direction = normal(end - start, plane_normal)
        left[i] = -direction * (in_length * 0.5)
        right[i] = direction * (out_length * 0.5)

    return left, right


def smooth_chords(
    positions: np.ndarray,
    left: np.ndarray,
    right: np.ndarray,
    smooth_in: float = 1.0,
    smooth_out: float = 1.0,
) -> Tangents:
    """
    Point every tangent along the chord to its neighbor.

    For each consecutive pair (prior, current) the prior's right tangent becomes
    half the chord scaled by ``smooth_in`` and the current's left tangent half the
    reversed chord scaled by ``smooth_out``. The path always wraps, so the first
    handle pairs with the last.

    Args:
        positions: Handle positions, shape (n, 3).
        left, right: Current tangents; copied, not modified.
        smooth_in, smooth_out: Scale of the outgoing and incoming tangents.

    Returns:
        Updated left and right tangents.
    """
    positions = np.asarray(positions, dtype=float)
    left = np.array(left, dtype=float)
    right = np.array(right, dtype=float)
    count = len(positions)

    for i in range(count):
        prior = neighbor(i, -1, count, True)
        half_chord = (positions[i] - positions[prior]) * 0.5
        right[prior] = half_chord * smooth_in
        left[i] = -half_chord * smooth_out

    return left, right


def smooth_tangents(
    left: np.ndarray, right: np.ndarray, up: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Build a local frame at each handle for sweeping geometry along the path.

    The side tangent is the normalized difference of the normalized left and
    right tangents. The side normal is ``up x side`` and the tangent normal is
    ``side x side_normal``, both normalized.

    Returns:
        New left tangents (the side tangent), right tangents (its negation),
        tangent normals and side normals.
    """
    left = np.asarray(left, dtype=float)
    right = np.asarray(right, dtype=float)
    up = np.asarray(up, dtype=float)

    new_left = np.zeros_like(left)
    new_right = np.zeros_like(right)
    tangent_normals = np.zeros_like(left)
    side_normals = np.zeros_like(left)

    for i in range(len(left)):
        side_tangent = normalize(normalize(left[i]) - normalize(right[i]))
        side_normal = normalize(cross(up, side_tangent))
        tangent_normal = normalize(-cross(side_normal, side_tangent))

        new_left[i] = side_tangent
        new_right[i] = -side_tangent
        tangent_normals[i] = tangent_normal
        side_normals[i] = side_normal

    return new_left, new_right, tangent_normals, side_normals
