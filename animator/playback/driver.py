"""Drive an :class:`Animator` from the Qt event loop."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional

from PySide6 import QtCore

from ..core.animator import Animator, FrameSubscription, subscriptions
from .settings import DriverSettings

logger = logging.getLogger(__name__)


def monotonic_ms() -> int:
    return time.perf_counter_ns() // 1_000_000


def wall_ms() -> int:
    return time.time_ns() // 1_000_000


_CLOCKS = {"monotonic": monotonic_ms, "wall": wall_ms}


class AnimationDriver(QtCore.QObject):
    """Runs the host update cycle and owns the frame timer.

    The host supplies ``update(msg, model) -> model`` and
    ``to_message(timestamp_ms) -> msg``. After every model change the
    animator's subscription is recomputed; the timer runs exactly while a
    subscription exists.
    """

    model_changed = QtCore.Signal(object)
    active_changed = QtCore.Signal(bool)

    def __init__(
        self,
        animator: Animator,
        model: Any,
        update: Callable[[Any, Any], Any],
        to_message: Callable[[int], Any],
        settings: Optional[DriverSettings] = None,
        now_ms: Optional[Callable[[], int]] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._animator = animator
        self._model = model
        self._update = update
        self._to_message = to_message
        self._settings = settings or DriverSettings()
        self._now_ms_override = now_ms
        self._subscription: Optional[FrameSubscription] = None

        self._timer = QtCore.QTimer(self)
        self._timer.timeout.connect(self._on_tick)
        self._apply_settings(self._settings)
        self._sync_subscription()

    # ------------------------------------------------------------------
    # Properties
    @property
    def model(self) -> Any:
        return self._model

    @property
    def animator(self) -> Animator:
        return self._animator

    @property
    def settings(self) -> DriverSettings:
        return self._settings

    @property
    def is_active(self) -> bool:
        return self._subscription is not None

    @property
    def timer_running(self) -> bool:
        return self._timer.isActive()

    # ------------------------------------------------------------------
    # Public control methods
    def dispatch(self, msg: Any) -> None:
        """Run one update and resync the frame subscription."""

        self._set_model(self._update(msg, self._model))

    def set_model(self, model: Any) -> None:
        self._set_model(model)

    def set_animator(self, animator: Animator) -> None:
        self._animator = animator
        self._sync_subscription()

    def apply_settings(self, settings: DriverSettings) -> None:
        self._settings = settings
        self._apply_settings(settings)

    def shutdown(self) -> None:
        self._timer.stop()
        self._subscription = None

    # ------------------------------------------------------------------
    # Internal helpers
    def _apply_settings(self, settings: DriverSettings) -> None:
        fps = max(1, int(settings.fps))
        self._timer.setInterval(int(1000 / fps))
        if settings.debug_log:
            logger.setLevel(logging.DEBUG)

    def _now_ms(self) -> int:
        if self._now_ms_override is not None:
            return int(self._now_ms_override())
        return _CLOCKS.get(self._settings.clock, monotonic_ms)()

    def _set_model(self, model: Any) -> None:
        self._model = model
        self.model_changed.emit(model)
        self._sync_subscription()

    def _sync_subscription(self) -> None:
        subscription = subscriptions(self._animator, self._to_message, self._model)
        was_active = self._subscription is not None
        self._subscription = subscription
        if subscription is not None and not was_active:
            logger.debug("Starting frame clock at %d fps", self._settings.fps)
            self._timer.start()
            self.active_changed.emit(True)
        elif subscription is None and was_active:
            logger.debug("Stopping frame clock")
            self._timer.stop()
            self.active_changed.emit(False)

    def _on_tick(self) -> None:
        if self._subscription is None:
            return
        self.dispatch(self._subscription.deliver(self._now_ms()))
