from __future__ import annotations

import logging
from typing import Optional, Sequence

import cv2
import numpy as np

from video_picker_scoring.frames.models import GrayFrame
from video_picker_scoring.metrics.models import MetricKind, Region

log = logging.getLogger("video_picker_scoring")

CLIP_LOW = 5
CLIP_HIGH = 250
MOTION_EPSILON = 1e-5


# ── Individual metric functions ─────────────────────────────────────


def _laplacian(gray: np.ndarray) -> np.ndarray:
    # ksize=1 is the 4-neighbour kernel: -4 * center + up + down + left + right
    return cv2.Laplacian(gray, cv2.CV_64F, ksize=1)


def compute_sharpness(frame: GrayFrame) -> float:
    """Laplacian variance over interior pixels; higher means sharper."""
    gray = frame.pixels
    if gray.shape[0] < 3 or gray.shape[1] < 3:
        return 0.0
    interior = _laplacian(gray)[1:-1, 1:-1]
    return max(0.0, float(interior.var()))


def _sharpness_in_region(lap: np.ndarray, x: int, y: int, w: int, h: int) -> float:
    height, width = lap.shape
    x0 = max(1, x)
    y0 = max(1, y)
    x1 = min(width - 2, x + w - 1)
    y1 = min(height - 2, y + h - 1)
    if x1 <= x0 or y1 <= y0:
        return 0.0
    return max(0.0, float(lap[y0:y1 + 1, x0:x1 + 1].var()))


def compute_sharpness_in_region(frame: GrayFrame, region: Region) -> float:
    """Laplacian variance restricted to *region* intersected with the interior."""
    return _sharpness_in_region(
        _laplacian(frame.pixels), region.x, region.y, region.width, region.height,
    )


def compute_exposure_clipping(frame: GrayFrame) -> float:
    """Fraction of pixels at or beyond the clipping levels (<=5 or >=250)."""
    gray = frame.pixels
    if gray.size == 0:
        return 0.0
    clipped = np.count_nonzero((gray <= CLIP_LOW) | (gray >= CLIP_HIGH))
    return float(clipped) / float(gray.size)


def compute_noise_estimate(frame: GrayFrame) -> float:
    """Mean absolute deviation from the 3x3 neighbourhood mean, scaled to [0, 1].

    Border pixels replicate the edge, i.e. neighbourhood indices are clamped.
    """
    gray = frame.pixels
    if gray.size == 0:
        return 0.0
    src = gray.astype(np.float64)
    local_mean = cv2.blur(src, (3, 3), borderType=cv2.BORDER_REPLICATE)
    return float(np.mean(np.abs(src - local_mean))) / 255.0


def compute_edge_strength(frame: GrayFrame) -> float:
    """Mean Sobel gradient magnitude over interior pixels (0-255 scale units)."""
    gray = frame.pixels
    if gray.shape[0] < 3 or gray.shape[1] < 3:
        return 0.0
    gx = cv2.Sobel(gray, cv2.CV_64F, 1, 0, ksize=3)[1:-1, 1:-1]
    gy = cv2.Sobel(gray, cv2.CV_64F, 0, 1, ksize=3)[1:-1, 1:-1]
    return float(np.mean(np.sqrt(gx * gx + gy * gy)))


def compute_motion_blur(frame: GrayFrame, previous: Optional[GrayFrame]) -> float:
    """Inter-frame change relative to the current frame's edge strength.

    Large pixel change with weak edges indicates smeared motion.  Returns 0
    when there is no comparable previous frame.
    """
    if previous is None:
        return 0.0
    if previous.pixels.shape != frame.pixels.shape:
        log.debug(
            "Frame size changed %s -> %s, skipping motion blur",
            previous.pixels.shape, frame.pixels.shape,
        )
        return 0.0

    diff_mean = float(np.mean(cv2.absdiff(frame.pixels, previous.pixels))) / 255.0
    edge = compute_edge_strength(frame) / 255.0
    return diff_mean / (edge + MOTION_EPSILON)


def compute_subject_blur(frame: GrayFrame, regions: Optional[Sequence[Region]] = None) -> float:
    """Area-weighted sharpness of the subject regions.

    Falls back to whole-frame sharpness when no usable region is supplied.
    """
    if not regions:
        return compute_sharpness(frame)

    height, width = frame.pixels.shape
    if height < 3 or width < 3:
        return compute_sharpness(frame)

    lap = _laplacian(frame.pixels)
    weighted_sum = 0.0
    area_sum = 0.0
    for r in regions:
        x = max(0, r.x)
        y = max(0, r.y)
        w = min(r.x + r.width, width) - x
        h = min(r.y + r.height, height) - y
        if w <= 0 or h <= 0:
            log.debug("Skipping region %s outside %dx%d frame", r, width, height)
            continue
        area = float(w * h)
        weighted_sum += _sharpness_in_region(lap, x, y, w, h) * area
        area_sum += area

    if area_sum <= 0.0:
        return compute_sharpness(frame)
    return weighted_sum / area_sum


# ── Dispatch ────────────────────────────────────────────────────────


def compute_metric(
    kind: MetricKind,
    frame: GrayFrame,
    previous: Optional[GrayFrame] = None,
    regions: Optional[Sequence[Region]] = None,
) -> float:
    """Compute the raw value of *kind* for *frame*."""
    if kind is MetricKind.SHARPNESS:
        return compute_sharpness(frame)
    if kind is MetricKind.EXPOSURE:
        return compute_exposure_clipping(frame)
    if kind is MetricKind.MOTION_BLUR:
        return compute_motion_blur(frame, previous)
    if kind is MetricKind.NOISE:
        return compute_noise_estimate(frame)
    if kind is MetricKind.PERSON_BLUR:
        return compute_subject_blur(frame, regions)
    raise ValueError(f"Unknown metric kind: {kind!r}")
