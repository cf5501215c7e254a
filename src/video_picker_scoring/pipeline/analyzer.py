from __future__ import annotations

import logging
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from video_picker_scoring.config import Config, Threshold
from video_picker_scoring.detection.person_detector import SubjectDetector
from video_picker_scoring.errors import (
    DecodeError,
    InvalidArgumentError,
    ScoringError,
    UnsupportedError,
)
from video_picker_scoring.frames.adapter import to_gray_frame
from video_picker_scoring.frames.models import GrayFrame, InputFrame, check_gray_pixels
from video_picker_scoring.logging_utils import LoggingFrameSink, null_frame_sink
from video_picker_scoring.media.frame_source import iter_sampled_frames
from video_picker_scoring.metrics.algorithms import compute_metric
from video_picker_scoring.metrics.models import MetricKind, Region
from video_picker_scoring.scoring.aggregator import MetricAggregate
from video_picker_scoring.scoring.models import AggregateReport, MetricResult
from video_picker_scoring.scoring.normalizer import normalize_score

log = logging.getLogger("video_picker_scoring")

FrameSink = Callable[[int, MetricKind, float, float], None]
StreamItem = Union[GrayFrame, InputFrame, np.ndarray]

METRIC_ORDER: Tuple[MetricKind, ...] = (
    MetricKind.SHARPNESS,
    MetricKind.EXPOSURE,
    MetricKind.MOTION_BLUR,
    MetricKind.NOISE,
    MetricKind.PERSON_BLUR,
)


@dataclass(frozen=True)
class MetricDefinition:
    kind: MetricKind
    threshold: Threshold


class FrameAnalyzer:
    """Scores a bounded frame sequence and reduces each metric to mean/worst.

    One analyzer may serve many invocations; every invocation owns its own
    aggregates and previous-frame slot, so concurrent calls do not interfere.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        detector: Optional[SubjectDetector] = None,
        frame_sink: Optional[FrameSink] = None,
    ) -> None:
        self.config = config or Config()
        self.detector = detector
        if frame_sink is None:
            frame_sink = LoggingFrameSink() if self.config.log_frame_details else null_frame_sink
        self.frame_sink = frame_sink
        self._metrics = tuple(
            MetricDefinition(kind, self.config.thresholds.for_kind(kind)) for kind in METRIC_ORDER
        )

    @property
    def metrics(self) -> Tuple[MetricDefinition, ...]:
        return self._metrics

    # ── Entry points ────────────────────────────────────────────────

    def analyze_frames(self, frames: Optional[Sequence[InputFrame]]) -> AggregateReport:
        """Score a pre-decoded frame array, processing at most ``max_frames``."""
        if not frames:
            raise InvalidArgumentError("no frames supplied")
        budget = min(len(frames), self.config.max_frames)
        if budget <= 0:
            raise InvalidArgumentError(f"effective frame budget is {budget}")
        return self._run(frames[i] for i in range(budget))

    def analyze_stream(self, frames: Iterable[StreamItem]) -> AggregateReport:
        """Score frames pulled from *frames* until exhausted or ``max_frames`` is reached.

        A source that ends early is fine; one that yields nothing raises
        ``DecodeError``.
        """
        if frames is None:
            raise InvalidArgumentError("frame source is missing")
        return self._run(islice(frames, self.config.max_frames))

    def analyze_video_file(self, path: Union[str, Path]) -> AggregateReport:
        """Decode and sample *path* with the configured rate, then score it."""
        cfg = self.config
        log.info(
            "Analyzing %s (fps=%.2f, max_frames=%d)", path, cfg.sampling_fps, cfg.max_frames,
        )
        source = iter_sampled_frames(
            path,
            sampling_fps=cfg.sampling_fps,
            max_frames=cfg.max_frames,
            start_time_s=cfg.start_time_s,
            target_short_side=cfg.target_short_side,
        )
        return self.analyze_stream(source)

    # ── Internals ───────────────────────────────────────────────────

    def _adapt(self, item: StreamItem) -> GrayFrame:
        try:
            if isinstance(item, GrayFrame):
                check_gray_pixels(item.pixels)
                return item
            if isinstance(item, np.ndarray):
                return GrayFrame.from_array(item)
            if isinstance(item, InputFrame):
                return to_gray_frame(item)
        except InvalidArgumentError as exc:
            raise UnsupportedError(f"cannot adapt frame: {exc}") from exc
        raise UnsupportedError(f"unsupported frame type: {type(item).__name__}")

    def _regions(self, frame: GrayFrame) -> Sequence[Region]:
        if self.detector is None:
            return ()
        try:
            return self.detector.detect(frame)
        except ScoringError:
            raise
        except Exception as exc:
            log.warning("Subject detector failed, using whole frame: %s", exc)
            return ()

    def _run(self, frames: Iterable[StreamItem]) -> AggregateReport:
        aggregates: List[MetricAggregate] = [MetricAggregate() for _ in self._metrics]
        previous: Optional[GrayFrame] = None
        processed = 0

        for index, item in enumerate(frames):
            frame = self._adapt(item)
            regions = self._regions(frame)

            for metric, agg in zip(self._metrics, aggregates):
                raw = compute_metric(metric.kind, frame, previous, regions)
                score = normalize_score(raw, metric.threshold)
                agg.update(raw, score)
                self.frame_sink(index, metric.kind, score, raw)

            previous = frame
            processed += 1

        if processed == 0:
            raise DecodeError("no frames were decoded")

        log.debug("Processed %d frames", processed)
        return self._finalize(aggregates)

    def _finalize(self, aggregates: Sequence[MetricAggregate]) -> AggregateReport:
        mean: List[MetricResult] = []
        worst: List[MetricResult] = []
        for metric, agg in zip(self._metrics, aggregates):
            kind = metric.kind
            mean.append(MetricResult(int(kind), kind.label, agg.mean_score, agg.mean_raw))
            worst.append(MetricResult(int(kind), kind.label, agg.worst_score, agg.worst_raw))
        return AggregateReport(item_count=len(mean), mean=tuple(mean), worst=tuple(worst))
