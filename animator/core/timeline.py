"""Single-value timelines.

A timeline is one of three immutable states:

* :class:`Ready`    - configured, waiting for its first clock tick
* :class:`Running`  - animating, started at ``start_ms``
* :class:`Complete` - finished, keeps only the final value

Transitions never mutate a timeline; :func:`advance` returns a new one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from numbers import Real
from typing import Any, Callable, Generic, Mapping, TypeVar, Union

from .easing import linear
from .interpolation import lerp

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_DURATION_MS = 1

Easing = Callable[[float], float]
Interpolate = Callable[[Any, Any, float], Any]


@dataclass(frozen=True)
class TimelineSpec(Generic[T]):
    """Configuration for :func:`timeline`."""

    duration_ms: int
    start: T
    end: T
    easing: Easing = linear
    interpolate: Interpolate = lerp

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "TimelineSpec":
        data = {}
        for fld in fields(cls):
            if fld.name in mapping:
                data[fld.name] = mapping[fld.name]
        missing = [name for name in ("duration_ms", "start", "end") if name not in data]
        if missing:
            raise ValueError(f"Timeline spec is missing: {', '.join(missing)}")
        return cls(**data)


@dataclass(frozen=True)
class Ready(Generic[T]):
    duration_ms: int
    easing: Easing
    start: T
    end: T
    interpolate: Interpolate


@dataclass(frozen=True)
class Running(Generic[T]):
    start_ms: int
    duration_ms: int
    easing: Easing
    start: T
    end: T
    interpolate: Interpolate
    cur_value: T


@dataclass(frozen=True)
class Complete(Generic[T]):
    cur_value: T


Timeline = Union[Ready, Running, Complete]


def _coerce_duration(duration_ms: Any) -> int:
    if isinstance(duration_ms, bool) or not isinstance(duration_ms, Real):
        raise TypeError(f"duration_ms must be a number, got {type(duration_ms).__name__}")
    duration = int(duration_ms)
    if duration < MIN_DURATION_MS:
        logger.warning(
            "Timeline duration %r ms is not positive; clamping to %d ms",
            duration_ms,
            MIN_DURATION_MS,
        )
        duration = MIN_DURATION_MS
    return duration


def timeline(spec: TimelineSpec | Mapping[str, Any]) -> Ready:
    """Build a timeline that starts on the first clock tick it receives."""

    if not isinstance(spec, TimelineSpec):
        spec = TimelineSpec.from_mapping(spec)
    if not callable(spec.easing):
        raise TypeError("easing must be callable")
    if not callable(spec.interpolate):
        raise TypeError("interpolate must be callable")
    return Ready(
        duration_ms=_coerce_duration(spec.duration_ms),
        easing=spec.easing,
        start=spec.start,
        end=spec.end,
        interpolate=spec.interpolate,
    )


def static(v: T) -> Complete:
    """A value with no animation in progress."""
    return Complete(v)


def static_if_inactive(v: T, tl: Timeline) -> Timeline:
    """Replace *tl* with ``static(v)`` unless it is still animating.

    Lets externally driven values (user input, for instance) win only when
    no animation is pending.
    """
    if isinstance(tl, Complete):
        return Complete(v)
    return tl


def is_active(tl: Timeline) -> bool:
    return not isinstance(tl, Complete)


def value(tl: Timeline) -> Any:
    if isinstance(tl, Ready):
        return tl.start
    return tl.cur_value


def start_value(tl: Timeline) -> Any:
    # A completed timeline no longer remembers where it started.
    if isinstance(tl, Complete):
        return tl.cur_value
    return tl.start


def end_value(tl: Timeline) -> Any:
    if isinstance(tl, Complete):
        return tl.cur_value
    return tl.end


def advance(now_ms: int, tl: Timeline) -> Timeline:
    """Move *tl* to the clock time *now_ms*.

    The first tick seats the clock origin of a ready timeline. A running
    timeline lands on ``easing(1.0)`` once progress reaches 1.0, whatever the
    overshoot.
    """
    if isinstance(tl, Ready):
        return Running(
            start_ms=now_ms,
            duration_ms=tl.duration_ms,
            easing=tl.easing,
            start=tl.start,
            end=tl.end,
            interpolate=tl.interpolate,
            cur_value=tl.start,
        )

    if isinstance(tl, Running):
        progress = float(now_ms - tl.start_ms) / float(tl.duration_ms)
        if progress >= 1.0:
            return Complete(tl.interpolate(tl.start, tl.end, tl.easing(1.0)))
        return Running(
            start_ms=tl.start_ms,
            duration_ms=tl.duration_ms,
            easing=tl.easing,
            start=tl.start,
            end=tl.end,
            interpolate=tl.interpolate,
            cur_value=tl.interpolate(tl.start, tl.end, tl.easing(progress)),
        )

    return tl
