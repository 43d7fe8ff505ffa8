"""Compose timelines embedded in a host model into one steppable unit."""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Generic, Mapping, Optional, Tuple, TypeVar

from .timeline import Complete, Timeline, advance, is_active as timeline_is_active, value

logger = logging.getLogger(__name__)

Model = TypeVar("Model")
Msg = TypeVar("Msg")

Getter = Callable[[Any], Timeline]
Setter = Callable[[Timeline, Any], Any]


@dataclass(frozen=True)
class AnimatedSlot:
    """One registered timeline: how to read it from and write it to a model."""

    getter: Getter
    setter: Setter
    name: str


@dataclass(frozen=True)
class FrameSubscription(Generic[Msg]):
    """Request for the host's per-frame clock while any timeline is active."""

    to_message: Callable[[int], Msg]

    def deliver(self, timestamp_ms: int) -> Msg:
        return self.to_message(int(timestamp_ms))


def to_millis(timestamp) -> int:
    """Convert a clock timestamp to integer milliseconds."""

    if isinstance(timestamp, datetime):
        return int(timestamp.timestamp() * 1000)
    if isinstance(timestamp, bool):
        raise TypeError("timestamp must be a number or datetime, got bool")
    return int(timestamp)


@dataclass(frozen=True)
class Animator(Generic[Model]):
    """Ordered, immutable collection of timeline slots.

    Slots are advanced in registration order and each setter's result is
    what the next getter sees. Accessors are expected to target disjoint
    parts of the model.
    """

    slots: Tuple[AnimatedSlot, ...] = ()

    @classmethod
    def empty(cls) -> "Animator":
        return cls()

    def animate(self, getter: Getter, setter: Setter, name: Optional[str] = None) -> "Animator":
        slot = AnimatedSlot(getter, setter, name or f"slot{len(self.slots)}")
        return Animator(self.slots + (slot,))

    def animate_field(self, field_name: str) -> "Animator":
        getter, setter = field(field_name)
        return self.animate(getter, setter, name=field_name)

    # ---- queries ----
    def is_active(self, model: Model) -> bool:
        for slot in self.slots:
            if timeline_is_active(slot.getter(model)):
                return True
        return False

    def values(self, model: Model) -> Dict[str, Any]:
        return {slot.name: value(slot.getter(model)) for slot in self.slots}

    # ---- stepping ----
    def step(self, timestamp, model: Model) -> Model:
        now_ms = to_millis(timestamp)
        for slot in self.slots:
            current = slot.getter(model)
            if isinstance(current, Complete):
                continue
            updated = advance(now_ms, current)
            if isinstance(updated, Complete):
                logger.debug("Timeline %s completed at %d ms", slot.name, now_ms)
            model = slot.setter(updated, model)
        return model


def empty() -> Animator:
    return Animator.empty()


def animate(getter: Getter, setter: Setter, animator: Animator, name: Optional[str] = None) -> Animator:
    """Register one more timeline slot on top of *animator*."""
    return animator.animate(getter, setter, name=name)


def field(name: str) -> Tuple[Getter, Setter]:
    """Accessor pair for a dataclass field or a mapping key named *name*.

    Setters return a new model: ``dataclasses.replace`` for dataclass
    instances, a shallow copy for mappings.
    """

    def _get(model: Any) -> Timeline:
        if isinstance(model, Mapping):
            return model[name]
        return getattr(model, name)

    def _set(tl: Timeline, model: Any) -> Any:
        if dataclasses.is_dataclass(model) and not isinstance(model, type):
            return dataclasses.replace(model, **{name: tl})
        if isinstance(model, Mapping):
            updated = dict(model)
            updated[name] = tl
            return updated
        raise TypeError(f"Cannot set field {name!r} on {type(model).__name__}")

    return _get, _set


def animate_field(name: str, animator: Animator) -> Animator:
    return animator.animate_field(name)


def subscriptions(
    animator: Animator, to_message: Callable[[int], Msg], model: Model
) -> Optional[FrameSubscription]:
    """Ask for the frame clock only while some timeline is Ready or Running."""

    if animator.is_active(model):
        return FrameSubscription(to_message)
    return None


def step(timestamp, animator: Animator, model: Model) -> Model:
    return animator.step(timestamp, model)
