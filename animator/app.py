import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from PySide6 import QtCore

if __package__ is None or __package__ == "":
    # Ensure the project root is on sys.path so absolute imports succeed when
    # the script is executed as a top-level entry point.
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from animator.core.animator import Animator, step
from animator.core.easing import EASING_FUNCTIONS, get_easing
from animator.core.interpolation import lerp, lerp_tuple
from animator.core.timeline import Timeline, TimelineSpec, timeline
from animator.playback.driver import AnimationDriver
from animator.playback.settings import DriverSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scene:
    x: Timeline
    color: Timeline
    label: str = "demo"


@dataclass(frozen=True)
class Tick:
    timestamp_ms: int


def build_scene(duration_ms: int, easing_name: str) -> Scene:
    easing = get_easing(easing_name)
    return Scene(
        x=timeline(TimelineSpec(duration_ms, 0.0, 100.0, easing, lerp)),
        color=timeline(TimelineSpec(duration_ms // 2 or 1, (255, 0, 0), (0, 0, 255), easing, lerp_tuple)),
    )


ANIMATOR = Animator.empty().animate_field("x").animate_field("color")


def update(msg, scene: Scene) -> Scene:
    if isinstance(msg, Tick):
        return step(msg.timestamp_ms, ANIMATOR, scene)
    return scene


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a headless animation and log its frames.")
    parser.add_argument("--duration-ms", type=int, default=1000)
    parser.add_argument("--easing", default="ease-in-out", choices=sorted(EASING_FUNCTIONS))
    parser.add_argument("--fps", type=int, default=30)
    return parser.parse_args(argv)


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    args = parse_args(argv)
    app = QtCore.QCoreApplication(sys.argv[:1])

    driver = AnimationDriver(
        ANIMATOR,
        build_scene(args.duration_ms, args.easing),
        update,
        Tick,
        settings=DriverSettings(fps=args.fps),
    )
    driver.model_changed.connect(lambda scene: logger.info("%s", ANIMATOR.values(scene)))
    driver.active_changed.connect(lambda active: None if active else app.quit())

    if not driver.is_active:
        return 0
    code = app.exec()
    driver.shutdown()
    return code

if __name__ == "__main__": sys.exit(main())
