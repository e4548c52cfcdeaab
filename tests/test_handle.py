import numpy as np
import pytest
from pydantic import ValidationError

from bezier_path import Handle


def test_tangents_default_to_zero():
    handle = Handle(position=(1.0, 2.0, 0.0))
    np.testing.assert_array_equal(handle.left_tangent, np.zeros(3))
    np.testing.assert_array_equal(handle.right_tangent, np.zeros(3))
    np.testing.assert_array_equal(handle.tangent_normal, np.zeros(3))
    np.testing.assert_array_equal(handle.side_normal, np.zeros(3))


def test_vectors_are_coerced_to_float_arrays():
    handle = Handle(position=[1, 2, 3], right_tangent=(1, 0))
    assert handle.position.dtype == np.float64
    np.testing.assert_array_equal(handle.right_tangent, [1.0, 0.0, 0.0])
    assert handle.x == 1.0
    assert handle.y == 2.0


def test_assignment_is_validated():
    handle = Handle()
    handle.left_tangent = (0.5, 0.5, 0.0)
    assert isinstance(handle.left_tangent, np.ndarray)
    with pytest.raises(ValidationError):
        handle.left_tangent = (1.0, 2.0, 3.0, 4.0)


def test_invalid_position_is_rejected():
    with pytest.raises(ValidationError):
        Handle(position=[[1.0, 2.0, 3.0]])


def test_control_points_are_offsets_from_position():
    handle = Handle(position=(1, 1, 0), left_tangent=(-0.5, 0, 0), right_tangent=(0.25, 0, 0))
    np.testing.assert_array_equal(handle.left_control_point(), [0.5, 1.0, 0.0])
    np.testing.assert_array_equal(handle.right_control_point(), [1.25, 1.0, 0.0])


def test_lock_makes_vectors_read_only():
    handle = Handle(position=(1, 1, 0))
    handle.lock()
    with pytest.raises(ValueError):
        handle.position[0] = 5.0
