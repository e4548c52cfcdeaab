import numpy as np
import numpy.typing as npt

Z_AXIS = np.array([0.0, 0.0, 1.0])


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> npt.NDArray[np.float64]:
    return np.array([x, y, z], dtype=float)


def as_vec3(value) -> npt.NDArray[np.float64]:
    """Coerce a sequence or array into a float array of shape (3,)."""
    arr = np.array(value, dtype=float)
    if arr.shape == (2,):
        arr = np.append(arr, 0.0)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {arr.shape}")
    return arr


def magnitude(v: np.ndarray) -> float:
    return float(np.linalg.norm(v))


def normalize(v: np.ndarray) -> npt.NDArray[np.float64]:
    """Unit vector along v. The zero vector normalizes to itself."""
    length = np.linalg.norm(v)
    if length == 0.0:
        return np.zeros(3)
    return v / length


def dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.dot(a, b))


def cross(a: np.ndarray, b: np.ndarray) -> npt.NDArray[np.float64]:
    return np.cross(a, b)


def normal(v: np.ndarray, plane_normal: np.ndarray = Z_AXIS) -> npt.NDArray[np.float64]:
    """
    Unit vector perpendicular to v inside the plane given by plane_normal.

    With the default xy working plane this is v rotated 90 degrees
    counter-clockwise, i.e. (-y, x, 0) normalized.
    """
    return normalize(np.cross(plane_normal, v))
