"""Interpolators with the ``(start, end, eased_progress) -> value`` shape."""
from __future__ import annotations

from typing import Any, Callable, Sequence, Tuple

import numpy as np


def lerp(a: float, b: float, p: float) -> float:
    return a + (b - a) * p


def lerp_tuple(a: Sequence[float], b: Sequence[float], p: float) -> Tuple[float, ...]:
    if len(a) != len(b):
        raise ValueError("Cannot interpolate tuples of different lengths.")
    return tuple(x + (y - x) * p for x, y in zip(a, b))


def lerp_array(a, b, p: float) -> np.ndarray:
    start = np.asarray(a, dtype=float)
    end = np.asarray(b, dtype=float)
    if start.shape != end.shape:
        raise ValueError(f"Cannot interpolate arrays of shapes {start.shape} and {end.shape}.")
    return start + (end - start) * p


def lerp_angle(a: float, b: float, p: float) -> float:
    """Interpolate degrees along the shortest arc."""
    delta = (b - a + 180.0) % 360.0 - 180.0
    return a + delta * p


def step_at(threshold: float = 1.0) -> Callable[[Any, Any, float], Any]:
    """Jump from start to end once eased progress reaches *threshold*."""

    def _step(a: Any, b: Any, p: float) -> Any:
        return b if p >= threshold else a

    return _step
