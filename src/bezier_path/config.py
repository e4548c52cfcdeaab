import numpy as np
from pydantic import BaseModel, Field, PrivateAttr, field_validator

from .errors import FrozenPathError
from .vec3 import as_vec3

DEFAULT_PRECISION = 1e-3
DEFAULT_MAX_RECURSION = 64
DEFAULT_EASING_SAMPLES = 20


class PathConfig(BaseModel):
    precision: float = Field(
        default=DEFAULT_PRECISION,
        gt=0,
        description="Subdivision stops once the candidate x is within this distance of the query",
    )
    max_recursion_depth: int = Field(
        default=DEFAULT_MAX_RECURSION,
        gt=0,
        description="Cap on subdivision depth and inverse search iterations",
    )
    plane_normal: np.ndarray = Field(
        default_factory=lambda: np.array([0.0, 0.0, 1.0]),
        description="Normal of the working plane used to derive perpendicular tangents",
    )
    easing_samples: int = Field(
        default=DEFAULT_EASING_SAMPLES,
        ge=0,
        description="Samples per segment tessellated by the easing constructor",
    )
    _locked: bool = PrivateAttr(default=False)

    class Config:
        arbitrary_types_allowed = True
        validate_assignment = True

    @field_validator("plane_normal", mode="before")
    @classmethod
    def coerce_plane_normal(cls, value):
        return as_vec3(value)

    def __setattr__(self, name, value):
        if not name.startswith("_") and getattr(self, "_locked", False):
            raise FrozenPathError(f"Path configuration is locked, cannot set {name}.")
        super().__setattr__(name, value)

    def lock(self) -> None:
        self.plane_normal.flags.writeable = False
        self._locked = True

    def writable_copy(self) -> "PathConfig":
        copy = self.model_copy(deep=True)
        copy._locked = False
        return copy
