from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_LABELS = {
    0: "sharpness",
    1: "exposure",
    2: "motion_blur",
    3: "noise",
    4: "person_blur",
}


class MetricKind(IntEnum):
    SHARPNESS = 0
    EXPOSURE = 1
    MOTION_BLUR = 2
    NOISE = 3
    PERSON_BLUR = 4

    @property
    def label(self) -> str:
        """Stable short name reported to callers."""
        return _LABELS[int(self)]

    @property
    def needs_previous(self) -> bool:
        return self is MetricKind.MOTION_BLUR


@dataclass(frozen=True)
class Region:
    """Subject bounding box in frame pixel coordinates."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return max(0, self.width) * max(0, self.height)
