from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from video_picker_scoring.errors import InvalidArgumentError
from video_picker_scoring.metrics.models import MetricKind

Profile = Literal["desktop", "mobile"]


@dataclass(frozen=True)
class Threshold:
    """Raw-metric reference values; ``good`` maps to score 1, ``bad`` to 0."""

    good: float
    bad: float


@dataclass(frozen=True)
class MetricThresholds:
    sharpness: Threshold = Threshold(20.0, 2.0)
    exposure: Threshold = Threshold(0.002, 0.02)
    motion_blur: Threshold = Threshold(0.2, 1.5)
    noise: Threshold = Threshold(0.001, 0.01)
    person_blur: Threshold = Threshold(20.0, 2.0)

    def for_kind(self, kind: MetricKind) -> Threshold:
        return getattr(self, kind.label)


MOBILE_THRESHOLDS = MetricThresholds(
    sharpness=Threshold(800.0, 50.0),
    exposure=Threshold(0.01, 0.2),
    motion_blur=Threshold(0.2, 1.5),
    noise=Threshold(0.02, 0.15),
    person_blur=Threshold(800.0, 50.0),
)


@dataclass(frozen=True)
class Config:
    # Sampling
    max_frames: int = 300
    sampling_fps: float = 5.0
    start_time_s: float = 0.0
    target_short_side: int = 360

    # Diagnostics
    log_frame_details: bool = False

    # Scoring
    thresholds: MetricThresholds = field(default_factory=MetricThresholds)

    def __post_init__(self) -> None:
        if self.max_frames < 0:
            raise InvalidArgumentError(f"max_frames must be >= 0, got {self.max_frames}")
        if self.sampling_fps <= 0:
            raise InvalidArgumentError(f"sampling_fps must be > 0, got {self.sampling_fps}")
        if self.start_time_s < 0:
            raise InvalidArgumentError(f"start_time_s must be >= 0, got {self.start_time_s}")
        if self.target_short_side < 0:
            raise InvalidArgumentError(
                f"target_short_side must be >= 0, got {self.target_short_side}"
            )

    @classmethod
    def for_profile(cls, profile: Profile, **overrides) -> "Config":
        """Build the default configuration of a deployment profile.

        ``desktop`` is the decode-driven variant that samples densely from a
        file; ``mobile`` caps work for resource-constrained hosts.
        """
        if profile == "desktop":
            base = dict(max_frames=300, sampling_fps=5.0, thresholds=MetricThresholds())
        elif profile == "mobile":
            base = dict(max_frames=16, sampling_fps=1.0, thresholds=MOBILE_THRESHOLDS)
        else:
            raise InvalidArgumentError(f"Unknown profile: {profile!r}")
        base.update(overrides)
        return cls(**base)
