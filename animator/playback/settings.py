"""Animation driver settings stored via QSettings."""
from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QSettings

SUPPORTED_CLOCKS = ("monotonic", "wall")


@dataclass
class DriverSettings:
    fps: int = 60
    clock: str = "monotonic"
    debug_log: bool = False


def _clamp_fps(value: int) -> int:
    return max(1, min(240, int(value)))


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, str):
        return value.lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _normalize_clock(value) -> str:
    if isinstance(value, str) and value.lower() in SUPPORTED_CLOCKS:
        return value.lower()
    return "monotonic"


def load_settings(qsettings: QSettings) -> DriverSettings:
    """Load driver settings from QSettings."""

    fps_raw = qsettings.value("animation/fps", 60)
    clock_raw = qsettings.value("animation/clock", "monotonic")
    debug_log_raw = qsettings.value("animation/debug_log", False)

    try:
        fps = _clamp_fps(int(fps_raw))
    except (TypeError, ValueError):
        fps = 60

    return DriverSettings(
        fps=fps,
        clock=_normalize_clock(clock_raw),
        debug_log=_parse_bool(debug_log_raw),
    )


def save_settings(qsettings: QSettings, settings: DriverSettings) -> None:
    """Persist driver settings to QSettings."""

    qsettings.setValue("animation/fps", _clamp_fps(settings.fps))
    qsettings.setValue("animation/clock", _normalize_clock(settings.clock))
    qsettings.setValue("animation/debug_log", bool(settings.debug_log))
