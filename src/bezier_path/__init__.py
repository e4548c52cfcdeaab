from .config import PathConfig
from .curve import Subdivision, bezier_point, de_casteljau, evaluate_at, subdivide
from .easing import default_smooth_path, evaluate_forward, evaluate_inverse, smooth_step
from .errors import BezierPathError, FrozenPathError, InsufficientHandlesError
from .handle import Handle
from .path import Path
from .tangents import neighbor
from .transform_3d import Transform3D

__all__ = [
    "PathConfig",
    "Subdivision",
    "bezier_point",
    "de_casteljau",
    "evaluate_at",
    "subdivide",
    "default_smooth_path",
    "evaluate_forward",
    "evaluate_inverse",
    "smooth_step",
    "BezierPathError",
    "FrozenPathError",
    "InsufficientHandlesError",
    "Handle",
    "Path",
    "neighbor",
    "Transform3D",
]
