import math

import numpy as np
import pytest

from bezier_path import tangents
from bezier_path.tangents import neighbor

COLLINEAR = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [3.0, 0.0, 0.0]])
UNEVEN = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [5.0, 0.0, 0.0]])
SQUARE = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, 1.0, 0.0]])


@pytest.mark.parametrize(
    "index, offset, count, loop, expected",
    [
        (1, 1, 3, False, 2),
        (1, -1, 3, False, 0),
        (0, -1, 3, False, None),
        (2, 1, 3, False, None),
        (0, -1, 3, True, 2),
        (2, 1, 3, True, 0),
        (0, 1, 1, True, 0),
        (0, 1, 0, True, None),
    ],
)
def test_neighbor(index, offset, count, loop, expected):
    assert neighbor(index, offset, count, loop) == expected


def test_smooth_uses_perpendicular_of_neighbor_chord():
    left, right = tangents.smooth(COLLINEAR)

    np.testing.assert_allclose(left[0], [0.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(right[0], [0.0, 0.5, 0.0], atol=1e-12)
    np.testing.assert_allclose(left[1], [0.0, -0.5, 0.0], atol=1e-12)
    np.testing.assert_allclose(right[1], [0.0, 1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(left[2], [0.0, -1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(right[2], [0.0, 0.0, 0.0], atol=1e-12)


def test_smooth_loop_wraps_first_and_last_handles():
    left, right = tangents.smooth(SQUARE, loop=True)

    # First handle sees the last one as its prior: chord (1, -1), perpendicular (1, 1)
    half = 0.5 / math.sqrt(2.0)
    np.testing.assert_allclose(right[0], [half, half, 0.0], atol=1e-12)
    np.testing.assert_allclose(left[0], [-half, -half, 0.0], atol=1e-12)


def test_smooth_open_path_has_zero_outer_tangents():
    left, right = tangents.smooth(SQUARE, loop=False)
    np.testing.assert_array_equal(left[0], np.zeros(3))
    np.testing.assert_array_equal(right[-1], np.zeros(3))


def test_smooth_is_deterministic():
    first = tangents.smooth(SQUARE, loop=True)
    second = tangents.smooth(SQUARE, loop=True)
    np.testing.assert_array_equal(first[0], second[0])
    np.testing.assert_array_equal(first[1], second[1])


def test_smooth_tolerates_coincident_handles():
    positions = np.zeros((3, 3))
    left, right = tangents.smooth(positions, loop=True)
    assert np.all(np.isfinite(left))
    assert np.all(np.isfinite(right))
    np.testing.assert_array_equal(left, np.zeros((3, 3)))


def test_smooth_auto_clamps_to_shorter_segment():
    left, right = tangents.smooth_auto(UNEVEN)

    shorter = 1.0
    assert np.linalg.norm(left[1]) <= shorter / 2 + 1e-12
    assert np.linalg.norm(right[1]) <= shorter / 2 + 1e-12
    np.testing.assert_allclose(left[1], [0.0, -0.5, 0.0], atol=1e-12)
    np.testing.assert_allclose(right[1], [0.0, 0.5, 0.0], atol=1e-12)


def test_smooth_without_clamp_overshoots_on_uneven_spacing():
    _, right = tangents.smooth(UNEVEN)
    assert np.linalg.norm(right[1]) == pytest.approx(2.0)


def test_smooth_auto_builds_chord_from_equal_lengths():
    positions = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 4.0, 0.0]])
    left, right = tangents.smooth_auto(positions)

    # Next point is pulled in to (1, 1): chord (1, 1), perpendicular (-1, 1)
    half = 0.5 / math.sqrt(2.0)
    np.testing.assert_allclose(right[1], [-half, half, 0.0], atol=1e-12)
    np.testing.assert_allclose(left[1], [half, -half, 0.0], atol=1e-12)


def test_smooth_auto_leaves_end_handles_unclamped():
    left, right = tangents.smooth_auto(UNEVEN)
    plain_left, plain_right = tangents.smooth(UNEVEN)
    np.testing.assert_allclose(right[0], plain_right[0])
    np.testing.assert_allclose(left[2], plain_left[2])


def test_smooth_chords():
    positions = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0], [4.0, 2.0, 0.0]])
    left = np.zeros((3, 3))
    right = np.zeros((3, 3))

    new_left, new_right = tangents.smooth_chords(positions, left, right, 1.0, 0.5)

    np.testing.assert_allclose(new_right[0], [1.0, 0.0, 0.0])
    np.testing.assert_allclose(new_right[1], [1.0, 1.0, 0.0])
    np.testing.assert_allclose(new_right[2], [-2.0, -1.0, 0.0])
    np.testing.assert_allclose(new_left[0], [1.0, 0.5, 0.0])
    np.testing.assert_allclose(new_left[1], [-0.5, 0.0, 0.0])
    np.testing.assert_allclose(new_left[2], [-0.5, -0.5, 0.0])
    # Inputs are left alone
    np.testing.assert_array_equal(left, np.zeros((3, 3)))


def test_smooth_tangents_builds_local_frame():
    left = np.array([[-1.0, 0.0, 0.0]])
    right = np.array([[1.0, 0.0, 0.0]])

    new_left, new_right, tangent_normals, side_normals = tangents.smooth_tangents(
        left, right, np.array([0.0, 1.0, 0.0])
    )

    np.testing.assert_allclose(new_left[0], [-1.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(new_right[0], [1.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(side_normals[0], [0.0, 0.0, 1.0], atol=1e-12)
    np.testing.assert_allclose(tangent_normals[0], [0.0, 1.0, 0.0], atol=1e-12)


def test_smooth_tangents_with_zero_tangents_yields_zero_frame():
    zeros = np.zeros((2, 3))
    results = tangents.smooth_tangents(zeros, zeros, np.array([0.0, 1.0, 0.0]))
    for result in results:
        np.testing.assert_array_equal(result, zeros)
