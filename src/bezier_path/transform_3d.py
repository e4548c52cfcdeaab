from pydantic import BaseModel, Field
import numpy as np
from scipy.spatial.transform import Rotation


class Transform3D(BaseModel):
    position: np.ndarray = Field(default_factory=lambda: np.zeros(3))
    rotation: Rotation = Field(default_factory=Rotation.identity)
    scale: np.ndarray = Field(default_factory=lambda: np.ones(3))

    class Config:
        arbitrary_types_allowed = True

    @classmethod
    def from_basis(
        cls, position: np.ndarray, x_axis: np.ndarray, y_axis: np.ndarray, z_axis: np.ndarray
    ) -> "Transform3D":
        """Frame at position with the given axes; identity rotation if an axis is degenerate."""
        basis = np.stack([x_axis, y_axis, z_axis], axis=-1)
        if np.any(np.isclose(np.linalg.norm(basis, axis=0), 0.0)):
            rotation = Rotation.identity()
        else:
            rotation = Rotation.from_matrix(basis)
        return cls(position=np.array(position, dtype=float), rotation=rotation)

    def as_matrix(self) -> np.ndarray:
        """Return the transform as a 4x4 transformation matrix."""
        matrix = np.identity(4)
        matrix[:3, :3] = self.rotation.as_matrix() * self.scale
        matrix[:3, 3] = self.position
        return matrix

    def apply(self, points: np.ndarray) -> np.ndarray:
        """Map local points of shape (n, 3) into the frame's space."""
        return self.rotation.apply(np.asarray(points, dtype=float) * self.scale) + self.position
