from __future__ import annotations

import logging
import sys

from video_picker_scoring.metrics.models import MetricKind

log = logging.getLogger("video_picker_scoring")


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure and return the application logger."""
    logger = logging.getLogger("video_picker_scoring")
    if logger.handlers:
        return logger

    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)-7s %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    return logger


def null_frame_sink(frame_index: int, kind: MetricKind, score: float, raw: float) -> None:
    return None


class LoggingFrameSink:
    """Per-frame diagnostics hook that writes one DEBUG line per metric."""

    def __init__(self, logger: logging.Logger = log) -> None:
        self._logger = logger

    def __call__(self, frame_index: int, kind: MetricKind, score: float, raw: float) -> None:
        self._logger.debug(
            "frame=%d metric=%s score=%.6f raw=%.6f",
            frame_index, kind.label, score, raw,
        )
