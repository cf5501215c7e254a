from __future__ import annotations

import math

from video_picker_scoring.config import Threshold


def normalize_score(raw: float, threshold: Threshold) -> float:
    """Map *raw* linearly from ``bad`` (0) to ``good`` (1), clamped to [0, 1].

    Works for metrics where lower raw is better as well, as long as the
    threshold lists ``good`` and ``bad`` accordingly.  A degenerate threshold
    (``good == bad``) always scores 0, and so does a NaN raw value.
    """
    if threshold.good == threshold.bad:
        return 0.0
    t = (raw - threshold.bad) / (threshold.good - threshold.bad)
    if math.isnan(t):
        return 0.0
    return max(0.0, min(1.0, t))
