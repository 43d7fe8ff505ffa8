from __future__ import annotations

import numpy as np
from typing import Any, List, Mapping, Tuple

from .timeline import TimelineSpec, timeline

def sample_timeline(spec: TimelineSpec | Mapping[str, Any], rate_hz: float) -> Tuple[np.ndarray, List[Any]]:
    """Sample the eased curve of *spec* at *rate_hz*, endpoint included."""
    tl = timeline(spec)
    rate = max(1.0, float(rate_hz))
    duration_s = tl.duration_ms / 1000.0
    n = max(1, int(np.floor(duration_s * rate)))
    ts = np.linspace(0.0, float(tl.duration_ms), n + 1, endpoint=True)
    ts = np.clip(ts, 0.0, float(tl.duration_ms))
    values: List[Any] = []
    for t in ts:
        progress = float(t) / float(tl.duration_ms)
        values.append(tl.interpolate(tl.start, tl.end, tl.easing(progress)))
    return ts, values
