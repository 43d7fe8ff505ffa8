"""Easing curves mapping linear progress to eased progress.

Every curve satisfies ``f(0) == 0`` and ``f(1) == 1``; in between it may
leave ``[0, 1]`` (``ease_out_back`` and ``ease_out_elastic`` overshoot).
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Dict, Sequence, Tuple

import numpy as np
from scipy.interpolate import CubicSpline

logger = logging.getLogger(__name__)

Easing = Callable[[float], float]


def linear(p: float) -> float:
    return p


def smoothstep(p: float) -> float:
    return p * p * (3.0 - 2.0 * p)


def ease_in_quad(p: float) -> float:
    return p * p


def ease_out_quad(p: float) -> float:
    return 1.0 - (1.0 - p) ** 2


def ease_in_out_quad(p: float) -> float:
    if p < 0.5:
        return 2.0 * p * p
    return 1.0 - ((-2.0 * p + 2.0) ** 2) / 2.0


def ease_in_cubic(p: float) -> float:
    return p ** 3


def ease_out_cubic(p: float) -> float:
    return 1.0 - (1.0 - p) ** 3


def ease_in_out_cubic(p: float) -> float:
    if p < 0.5:
        return 4.0 * p ** 3
    return 1.0 - ((-2.0 * p + 2.0) ** 3) / 2.0


def ease_out_back(p: float) -> float:
    c1 = 1.70158
    c3 = c1 + 1.0
    return 1.0 + c3 * (p - 1.0) ** 3 + c1 * (p - 1.0) ** 2


def ease_out_elastic(p: float) -> float:
    """Spring-like curve that overshoots before settling on 1."""
    if p == 0.0 or p == 1.0:
        return p
    period = 0.3
    shift = period / 4.0
    return math.pow(2.0, -10.0 * p) * math.sin((p - shift) * (2.0 * math.pi) / period) + 1.0


# ---- cubic bezier ----
def _cubic_bezier(u: float, p0: float, p1: float, p2: float, p3: float) -> float:
    omu = 1.0 - u
    return (
        (omu ** 3) * p0
        + 3.0 * (omu ** 2) * u * p1
        + 3.0 * omu * (u ** 2) * p2
        + (u ** 3) * p3
    )


def _cubic_bezier_derivative(u: float, p0: float, p1: float, p2: float, p3: float) -> float:
    omu = 1.0 - u
    return 3.0 * (
        (omu ** 2) * (p1 - p0)
        + 2.0 * omu * u * (p2 - p1)
        + (u ** 2) * (p3 - p2)
    )


def _solve_bezier_parameter(target: float, x1: float, x2: float) -> float:
    if target <= 0.0:
        return 0.0
    if target >= 1.0:
        return 1.0

    u = target
    for _ in range(8):
        x = _cubic_bezier(u, 0.0, x1, x2, 1.0)
        derivative = _cubic_bezier_derivative(u, 0.0, x1, x2, 1.0)
        if abs(derivative) <= 1e-12:
            break
        u_new = min(1.0, max(0.0, u - (x - target) / derivative))
        if abs(u_new - u) <= 1e-8:
            u = u_new
            break
        u = u_new

    if abs(_cubic_bezier(u, 0.0, x1, x2, 1.0) - target) > 1e-6:
        low, high = 0.0, 1.0
        for _ in range(24):
            mid = 0.5 * (low + high)
            if _cubic_bezier(mid, 0.0, x1, x2, 1.0) < target:
                low = mid
            else:
                high = mid
        u = 0.5 * (low + high)

    return u


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> Easing:
    """CSS-style ``cubic-bezier(x1, y1, x2, y2)`` easing.

    The x control points must lie in ``[0, 1]`` so the curve is a function of
    progress; y control points are unconstrained.
    """
    x1, y1, x2, y2 = float(x1), float(y1), float(x2), float(y2)
    if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
        raise ValueError("cubic_bezier x control points must be within [0, 1].")

    def _ease(p: float) -> float:
        if p <= 0.0:
            return 0.0
        if p >= 1.0:
            return 1.0
        u = _solve_bezier_parameter(float(p), x1, x2)
        return _cubic_bezier(u, 0.0, y1, y2, 1.0)

    return _ease


def spline(points: Sequence[Tuple[float, float]]) -> Easing:
    """Natural cubic spline through ``(progress, eased)`` control points."""

    if len(points) < 3:
        raise ValueError("spline easing needs at least three control points.")
    t = np.array([float(p[0]) for p in points], dtype=float)
    v = np.array([float(p[1]) for p in points], dtype=float)
    if np.any(np.diff(t) <= 0):
        raise ValueError("spline control points must be strictly increasing in progress.")
    if t[0] != 0.0 or t[-1] != 1.0 or v[0] != 0.0 or v[-1] != 1.0:
        raise ValueError("spline control points must start at (0, 0) and end at (1, 1).")
    cs = CubicSpline(t, v, bc_type="natural", extrapolate=True)

    def _ease(p: float) -> float:
        return float(cs(p))

    return _ease


EASING_FUNCTIONS: Dict[str, Easing] = {
    "linear": linear,
    "smoothstep": smoothstep,
    "ease-in-quad": ease_in_quad,
    "ease-out-quad": ease_out_quad,
    "ease-in-out-quad": ease_in_out_quad,
    "ease-in-cubic": ease_in_cubic,
    "ease-out-cubic": ease_out_cubic,
    "ease-in-out-cubic": ease_in_out_cubic,
    "ease-out-back": ease_out_back,
    "ease-out-elastic": ease_out_elastic,
    "ease": cubic_bezier(0.25, 0.1, 0.25, 1.0),
    "ease-in": cubic_bezier(0.42, 0.0, 1.0, 1.0),
    "ease-out": cubic_bezier(0.0, 0.0, 0.58, 1.0),
    "ease-in-out": cubic_bezier(0.42, 0.0, 0.58, 1.0),
}


def get_easing(name: str) -> Easing:
    try:
        return EASING_FUNCTIONS[name]
    except KeyError:
        logger.warning("Unknown easing requested: %s; using linear", name)
        return linear
