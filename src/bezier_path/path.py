import logging
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np

from . import tangents
from .config import PathConfig
from .curve import evaluate_at, segment_points, subdivide
from .errors import FrozenPathError, InsufficientHandlesError
from .handle import Handle
from .transform_3d import Transform3D
from .vec3 import as_vec3

logger = logging.getLogger(__name__)


class Path:
    """
    An ordered sequence of handles joined by cubic Bézier segments.

    Used as an easing function, handle x is time and y is value and the x
    coordinates must be non-decreasing along the path. This is not checked.

    ``vertex_buffer`` is a cache filled by ``tessellate`` only. Editing handles
    or re-deriving tangents does not refresh it; call ``tessellate`` again after
    any change.
    """

    def __init__(self, handles: Iterable[Handle] = (), config: Optional[PathConfig] = None):
        self.config = config.writable_copy() if config is not None else PathConfig()
        self._handles: list[Handle] = []
        self._vertex_buffer = np.empty((0, 3))
        self._frozen = False
        for handle in handles:
            self.append(handle)

    @classmethod
    def ease_in_out(
        cls,
        start_time: float,
        end_time: float,
        start_value: float,
        end_value: float,
        ease_in: float,
        ease_out: float,
        config: Optional[PathConfig] = None,
    ) -> "Path":
        """
        Build an ease-in/ease-out ramp from (start_time, start_value) to
        (end_time, end_value).

        A third handle mirrors the ramp back to start_value one duration past
        end_time, so evaluating exactly at end_time is bracketed by a segment.
        The ramp is tessellated once with ``config.easing_samples`` samples per
        segment.
        """
        path = cls(config=config)
        path.append(
            Handle(position=(start_time, start_value, 0.0), right_tangent=(ease_in, 0.0, 0.0))
        )
        path.append(
            Handle(
                position=(end_time, end_value, 0.0),
                left_tangent=(-ease_out, 0.0, 0.0),
                right_tangent=(ease_out, 0.0, 0.0),
            )
        )
        path.append(
            Handle(
                position=(end_time + (end_time - start_time), start_value, 0.0),
                left_tangent=(-ease_in, 0.0, 0.0),
            )
        )
        path.tessellate(path.config.easing_samples)
        return path

    @classmethod
    def ease_segment(
        cls,
        start_time: float,
        end_time: float,
        start_value: float,
        end_value: float,
        ease_in: float,
        ease_out: float,
        config: Optional[PathConfig] = None,
    ) -> "Path":
        """Two-handle ease-in/ease-out segment from start to end."""
        path = cls(config=config)
        path.append(
            Handle(position=(start_time, start_value, 0.0), right_tangent=(ease_in, 0.0, 0.0))
        )
        path.append(
            Handle(position=(end_time, end_value, 0.0), left_tangent=(-ease_out, 0.0, 0.0))
        )
        return path

    # Configuration

    @property
    def precision(self) -> float:
        return self.config.precision

    @property
    def max_recursion_depth(self) -> int:
        return self.config.max_recursion_depth

    def set_precision(self, precision: float) -> None:
        self._check_writable()
        self.config.precision = precision

    def set_max_recursion(self, depth: int) -> None:
        self._check_writable()
        self.config.max_recursion_depth = depth

    # Editing

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Path":
        """Make this path read-only. Further edits raise FrozenPathError."""
        self._frozen = True
        for handle in self._handles:
            handle.lock()
        self.config.lock()
        self._vertex_buffer.flags.writeable = False
        logger.debug("Froze path with %d handles", len(self._handles))
        return self

    def _check_writable(self) -> None:
        if self._frozen:
            raise FrozenPathError("Path is frozen and cannot be modified.")

    def append(self, handle: Handle) -> Handle:
        """Store a copy of handle at the end of the path and return the copy."""
        self._check_writable()
        stored = handle.writable_copy()
        self._handles.append(stored)
        return stored

    def __iadd__(self, handle: Handle) -> "Path":
        self.append(handle)
        return self

    def remove(self, index: int) -> None:
        self._check_writable()
        del self._handles[index]
        logger.debug("Removed handle %d, %d left", index, len(self._handles))

    def __isub__(self, index: int) -> "Path":
        self.remove(index)
        return self

    def insert(self, index: int, handle: Handle) -> Handle:
        """Store a copy of handle at index and return the stored copy."""
        self._check_writable()
        if not 0 <= index <= len(self._handles):
            raise IndexError(
                f"Insert index {index} out of bounds for path of size {len(self._handles)}"
            )
        stored = handle.writable_copy()
        self._handles.insert(index, stored)
        logger.debug("Inserted handle at %d", index)
        return stored

    def clear(self) -> None:
        self._check_writable()
        self._handles.clear()

    @property
    def handles(self) -> Sequence[Handle]:
        return tuple(self._handles)

    def length(self) -> int:
        return len(self._handles)

    def __len__(self):
        return len(self._handles)

    def __getitem__(self, index: int) -> Handle:
        return self._handles[index]

    def __iter__(self) -> Iterator[Handle]:
        return iter(self._handles)

    def __repr__(self):
        return (
            f"Path(handles={len(self._handles)}, precision={self.precision}, "
            f"max_recursion_depth={self.max_recursion_depth})"
        )

    # Extent

    def start(self) -> float:
        if not self._handles:
            return 0.0
        return self._handles[0].x

    def end(self) -> float:
        if not self._handles:
            return 0.0
        return self._handles[-1].x

    def start_value(self) -> float:
        if not self._handles:
            return 0.0
        return self._handles[0].y

    def end_value(self) -> float:
        if not self._handles:
            return 0.0
        return self._handles[-1].y

    def duration(self) -> float:
        if not self._handles:
            return 0.0
        return self._handles[-1].x - self._handles[0].x

    # Tangent derivation

    def _positions(self) -> np.ndarray:
        if not self._handles:
            return np.empty((0, 3))
        return np.stack([handle.position for handle in self._handles])

    def _tangents(self) -> tuple[np.ndarray, np.ndarray]:
        if not self._handles:
            return np.empty((0, 3)), np.empty((0, 3))
        return (
            np.stack([handle.left_tangent for handle in self._handles]),
            np.stack([handle.right_tangent for handle in self._handles]),
        )

    def _write_tangents(self, left: np.ndarray, right: np.ndarray) -> None:
        for handle, left_tangent, right_tangent in zip(self._handles, left, right):
            handle.left_tangent = left_tangent
            handle.right_tangent = right_tangent

    def smooth(self, loop: bool = False) -> None:
        """Derive every handle's tangents from its neighbors."""
        self._check_writable()
        left, right = tangents.smooth(self._positions(), loop, self.config.plane_normal)
        self._write_tangents(left, right)

    def smooth_auto(self, loop: bool = False) -> None:
        """Derive tangents, clamping uneven neighbor distances to avoid overshoot."""
        self._check_writable()
        left, right = tangents.smooth_auto(self._positions(), loop, self.config.plane_normal)
        self._write_tangents(left, right)

    def smooth_chords(self, smooth_in: float = 1.0, smooth_out: float = 1.0) -> None:
        """Point tangents along the chords to neighboring handles. Always wraps."""
        self._check_writable()
        left, right = tangents.smooth_chords(
            self._positions(), *self._tangents(), smooth_in, smooth_out
        )
        self._write_tangents(left, right)

    def smooth_tangents(self, up=(0.0, 1.0, 0.0)) -> None:
        """
        Replace the tangents with a local frame for sweeping geometry.

        Afterwards the tangents no longer describe the curve shape; evaluate
        before calling this, not after.
        """
        self._check_writable()
        left, right, tangent_normals, side_normals = tangents.smooth_tangents(
            *self._tangents(), as_vec3(up)
        )
        self._write_tangents(left, right)
        for handle, tangent_normal, side_normal in zip(
            self._handles, tangent_normals, side_normals
        ):
            handle.tangent_normal = tangent_normal
            handle.side_normal = side_normal

    def frames(self) -> list[Transform3D]:
        """One transform per handle built from the frame left by smooth_tangents."""
        return [
            Transform3D.from_basis(
                handle.position, handle.side_normal, handle.tangent_normal, handle.left_tangent
            )
            for handle in self._handles
        ]

    # Evaluation

    def get_value(self, time: float) -> float:
        """
        Value (y) of the path at x == time.

        Clamps to the first handle's value before the path and to the last
        handle's value after it. An empty path evaluates to 0.
        """
        count = len(self._handles)
        for i, h1 in enumerate(self._handles):
            if time < h1.x:
                return h1.y

            if i + 1 == count:
                return h1.y

            h2 = self._handles[i + 1]
            if h2.x < time:
                continue

            result = subdivide(
                *segment_points(h1, h2),
                time,
                self.precision,
                self.max_recursion_depth,
            )
            logger.debug(
                "Subdivision of segment %d at %f stopped at depth %d (u=%f)",
                i, time, result.depth, result.parameter,
            )
            return result.value

        return 0.0

    def get_time(self, value: float, precision: Optional[float] = None) -> float:
        """
        Time (x) at which the path reaches value, by bisection over get_value.

        Assumes the path is non-decreasing. Searches between the first and last
        handle's x until the bracket is narrower than precision (the path's own
        precision by default).

        Raises:
            InsufficientHandlesError: the path has fewer than two handles.
        """
        if len(self._handles) < 2:
            raise InsufficientHandlesError(2, len(self._handles))

        if precision is None:
            precision = self.precision

        min_time = self._handles[0].x
        max_time = self._handles[-1].x
        iteration = 0

        while abs(max_time - min_time) > precision:
            mid_time = (min_time + max_time) / 2.0
            mid_value = self.get_value(mid_time)

            if mid_value == value:
                return mid_time
            if iteration >= self.max_recursion_depth:
                logger.debug("Inverse search for %f hit the iteration cap", value)
                return mid_time

            if mid_value < value:
                min_time = mid_time
            else:
                max_time = mid_time
            iteration += 1

        return (min_time + max_time) / 2.0

    def point_at(self, t: float) -> np.ndarray:
        """
        Point on the path at a global parameter.

        The integer part of t picks the segment starting at that handle (wrapping
        around the path), the fractional part is the parameter inside it.
        """
        count = len(self._handles)
        if not count:
            return np.zeros(3)

        index = int(t)
        u = t - index
        h1 = self._handles[index % count]
        h2 = self._handles[(index + 1) % count]
        return evaluate_at(h1, h2, u)

    # Tessellation

    @property
    def vertex_buffer(self) -> np.ndarray:
        return self._vertex_buffer

    def tessellate(self, samples_per_segment: int, loop: bool = False) -> None:
        """
        Sample every segment at uniform parameter steps into ``vertex_buffer``.

        Each segment contributes ``samples_per_segment`` points at
        u = i / samples_per_segment, so a segment's end point is the next
        segment's first sample. A looped path adds the closing segment back to
        the first handle plus one final point on the first handle. Does nothing
        if there is nothing to sample.
        """
        self._check_writable()
        count = len(self._handles)
        segment_count = count if loop else count - 1
        if segment_count <= 0 or samples_per_segment <= 0:
            return

        u = np.arange(samples_per_segment) / samples_per_segment
        chunks = []
        for i in range(segment_count):
            h1 = self._handles[i]
            h2 = self._handles[tangents.neighbor(i, 1, count, loop)]
            chunks.append(evaluate_at(h1, h2, u))

        if loop:
            chunks.append(self._handles[0].position[np.newaxis, :])

        self._vertex_buffer = np.vstack(chunks)
        logger.debug(
            "Tessellated %d segments into %d points", segment_count, len(self._vertex_buffer)
        )
