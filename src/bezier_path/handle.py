import numpy as np
from pydantic import BaseModel, Field, PrivateAttr, field_validator

from .errors import FrozenPathError
from .vec3 import as_vec3


class Handle(BaseModel):
    """
    A control point of a Bezier path.

    The tangents are offsets relative to ``position``: the Bezier control point
    on either side of the handle is ``position + tangent``. Zero tangents give
    a sharp corner.
    """

    position: np.ndarray = Field(
        default_factory=lambda: np.zeros(3), description="Handle position (x=time, y=value)"
    )
    left_tangent: np.ndarray = Field(
        default_factory=lambda: np.zeros(3), description="Incoming tangent offset"
    )
    right_tangent: np.ndarray = Field(
        default_factory=lambda: np.zeros(3), description="Outgoing tangent offset"
    )
    tangent_normal: np.ndarray = Field(
        default_factory=lambda: np.zeros(3),
        description="Orientation normal along the path, set by smooth_tangents",
    )
    side_normal: np.ndarray = Field(
        default_factory=lambda: np.zeros(3),
        description="Orientation normal across the path, set by smooth_tangents",
    )
    _locked: bool = PrivateAttr(default=False)

    class Config:
        arbitrary_types_allowed = True
        validate_assignment = True

    @field_validator(
        "position", "left_tangent", "right_tangent", "tangent_normal", "side_normal",
        mode="before",
    )
    @classmethod
    def coerce_vector(cls, value):
        return as_vec3(value)

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    def left_control_point(self) -> np.ndarray:
        return self.position + self.left_tangent

    def right_control_point(self) -> np.ndarray:
        return self.position + self.right_tangent

    def __setattr__(self, name, value):
        if not name.startswith("_") and getattr(self, "_locked", False):
            raise FrozenPathError(f"Handle is locked, cannot set {name}.")
        super().__setattr__(name, value)

    def lock(self) -> None:
        """Make this handle read-only, its vectors included."""
        for name in type(self).model_fields:
            getattr(self, name).flags.writeable = False
        self._locked = True

    def writable_copy(self) -> "Handle":
        """Deep copy that accepts edits even when this handle is locked."""
        copy = self.model_copy(deep=True)
        copy._locked = False
        return copy

    def __repr__(self):
        return (
            f"Handle(position={self.position.tolist()}, "
            f"left={self.left_tangent.tolist()}, right={self.right_tangent.tolist()})"
        )
