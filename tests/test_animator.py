from dataclasses import dataclass
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from animator.core.animator import (
    Animator,
    FrameSubscription,
    animate,
    animate_field,
    empty,
    field,
    step,
    subscriptions,
    to_millis,
)
from animator.core.interpolation import lerp
from animator.core.timeline import (
    Complete,
    Running,
    Timeline,
    TimelineSpec,
    static,
    timeline,
    value,
)


@dataclass(frozen=True)
class Model:
    x: Timeline
    y: Timeline
    title: str = "scene"


def _tl(start: float = 0.0, end: float = 100.0, duration_ms: int = 1000) -> Timeline:
    return timeline(TimelineSpec(duration_ms, start, end, interpolate=lerp))


def _xy_animator() -> Animator:
    return animate_field("y", animate_field("x", empty()))


def test_empty_animator_is_inactive_and_step_is_identity():
    model = Model(x=_tl(), y=_tl())
    animator = empty()
    assert not animator.is_active(model)
    assert step(123, animator, model) is model
    assert subscriptions(animator, lambda t: t, model) is None


def test_subscription_requested_when_any_timeline_running():
    animator = _xy_animator()
    model = step(0, animator, Model(x=static(5.0), y=_tl()))
    assert isinstance(model.x, Complete)
    assert isinstance(model.y, Running)

    sub = subscriptions(animator, lambda t: ("tick", t), model)
    assert isinstance(sub, FrameSubscription)
    assert sub.deliver(16) == ("tick", 16)


def test_no_subscription_when_all_complete():
    animator = _xy_animator()
    model = Model(x=static(1.0), y=static(2.0))
    assert subscriptions(animator, lambda t: t, model) is None


def test_ready_timeline_counts_as_active():
    animator = _xy_animator()
    assert animator.is_active(Model(x=static(1.0), y=_tl()))


def test_is_active_short_circuits_on_first_active_slot():
    second_getter = MagicMock(return_value=static(0.0))
    animator = empty().animate(lambda m: _tl(), lambda tl, m: m).animate(second_getter, lambda tl, m: m)
    assert animator.is_active(object())
    second_getter.assert_not_called()


def test_step_advances_every_timeline_with_same_timestamp():
    animator = _xy_animator()
    model = Model(x=_tl(0.0, 100.0), y=_tl(10.0, 20.0, duration_ms=500))
    model = step(1000, animator, model)
    model = step(1250, animator, model)

    assert value(model.x) == 25.0
    assert value(model.y) == 15.0
    assert model.title == "scene"

    model = step(2000, animator, model)
    assert model.x == Complete(100.0)
    assert model.y == Complete(20.0)
    assert subscriptions(animator, lambda t: t, model) is None


def test_step_twice_with_same_timestamp_is_idempotent():
    animator = _xy_animator()
    model = step(0, animator, Model(x=_tl(), y=_tl()))
    first = step(400, animator, model)
    second = step(400, animator, first)
    assert first == second
    assert value(second.x) == 40.0


def test_step_runs_slots_in_registration_order_threading_the_model():
    calls = []

    def make_setter(tag):
        def _set(tl, model):
            calls.append((tag, model["seen"]))
            updated = dict(model)
            updated[tag] = tl
            updated["seen"] = model["seen"] + (tag,)
            return updated

        return _set

    animator = empty()
    for tag in ("a", "b", "c"):
        animator = animate(lambda m, tag=tag: m[tag], make_setter(tag), animator, name=tag)

    model = {"a": _tl(), "b": _tl(), "c": _tl(), "seen": ()}
    result = step(0, animator, model)

    assert calls == [("a", ()), ("b", ("a",)), ("c", ("a", "b"))]
    assert result["seen"] == ("a", "b", "c")
    assert [slot.name for slot in animator.slots] == ["a", "b", "c"]


def test_step_skips_setters_for_complete_timelines():
    setter = MagicMock()
    animator = empty().animate(lambda m: static(1.0), setter)
    model = object()
    assert step(10, animator, model) is model
    setter.assert_not_called()


def test_animators_are_immutable_and_reusable():
    base = empty()
    one = base.animate_field("x")
    two = one.animate_field("y")
    assert base.slots == ()
    assert len(one.slots) == 1
    assert len(two.slots) == 2


def test_field_accessors_work_with_mappings():
    getter, setter = field("x")
    model = {"x": static(1.0), "other": 3}
    updated = setter(static(2.0), model)
    assert getter(updated) == Complete(2.0)
    assert model["x"] == Complete(1.0)
    assert updated["other"] == 3


def test_field_setter_rejects_plain_objects():
    _, setter = field("x")
    with pytest.raises(TypeError):
        setter(static(1.0), object())


def test_values_snapshot_uses_slot_names():
    animator = _xy_animator()
    model = Model(x=_tl(3.0, 4.0), y=static(9.0))
    assert animator.values(model) == {"x": 3.0, "y": 9.0}


def test_default_slot_names_follow_registration_index():
    animator = empty().animate(lambda m: m, lambda tl, m: m).animate(lambda m: m, lambda tl, m: m)
    assert [slot.name for slot in animator.slots] == ["slot0", "slot1"]


def test_to_millis_accepts_numbers_and_datetimes():
    assert to_millis(1500) == 1500
    assert to_millis(1500.9) == 1500
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert to_millis(stamp) == int(stamp.timestamp() * 1000)
    with pytest.raises(TypeError):
        to_millis(True)


def test_step_accepts_datetime_timestamps():
    animator = Animator.empty().animate_field("x")
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    later = datetime(2024, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc)
    model = {"x": _tl()}
    model = step(later, animator, step(start, animator, model))
    assert value(model["x"]) == 50.0
