"""Qt bindings that feed frame timestamps to an animator."""

from .driver import AnimationDriver
from .settings import DriverSettings, load_settings, save_settings

__all__ = [
    "AnimationDriver",
    "DriverSettings",
    "load_settings",
    "save_settings",
]
