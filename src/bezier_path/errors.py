class BezierPathError(Exception):
    """Base class for errors raised by bezier_path."""


class InsufficientHandlesError(BezierPathError, ValueError):
    """The operation needs more handles than the path holds."""

    def __init__(self, required: int, actual: int):
        super().__init__(
            f"At least {required} handles are required, path has {actual}."
        )
        self.required = required
        self.actual = actual


class FrozenPathError(BezierPathError, RuntimeError):
    """Attempt to modify a path that has been frozen."""
