from functools import lru_cache

from .config import DEFAULT_PRECISION
from .path import Path


def evaluate_forward(
    start_time: float,
    end_time: float,
    start_value: float,
    end_value: float,
    ease_in: float,
    ease_out: float,
    time: float,
    precision: float = DEFAULT_PRECISION,
) -> float:
    """
    One-shot value of an ease-in/ease-out segment at time.

    The end handle's left tangent is (-ease_out, 0, 0), pointing back toward
    the start like the three-handle ramp of Path.ease_in_out. Older two-handle
    variants used +ease_out, which pushes the control point past end_time and
    makes x fold back on itself.
    """
    path = Path.ease_segment(start_time, end_time, start_value, end_value, ease_in, ease_out)
    path.set_precision(precision)
    return path.get_value(time)


def evaluate_inverse(
    start_time: float,
    end_time: float,
    start_value: float,
    end_value: float,
    ease_in: float,
    ease_out: float,
    value: float,
    precision: float = DEFAULT_PRECISION,
) -> float:
    """One-shot time at which an ease-in/ease-out segment reaches value."""
    path = Path.ease_segment(start_time, end_time, start_value, end_value, ease_in, ease_out)
    path.set_precision(precision)
    return path.get_time(value, precision)


@lru_cache(maxsize=None)
def default_smooth_path() -> Path:
    """
    Shared, frozen ease-in/ease-out profile over [0, 1] with handles of 0.5.

    Built on first use and reused afterwards.
    """
    return Path.ease_in_out(0.0, 1.0, 0.0, 1.0, 0.5, 0.5).freeze()


def smooth_step(x: float) -> float:
    """Ease x in [0, 1] through the default smoothing profile."""
    return default_smooth_path().get_value(x)
