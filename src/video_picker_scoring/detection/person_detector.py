from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

import cv2

from video_picker_scoring.frames.models import GrayFrame
from video_picker_scoring.metrics.models import Region

log = logging.getLogger("video_picker_scoring")


class SubjectDetector(Protocol):
    def detect(self, frame: GrayFrame) -> Sequence[Region]:
        ...


class HogPersonDetector:
    """Pedestrian detector backed by OpenCV's default HOG people SVM.

    The descriptor is built lazily and kept per instance; give each thread its
    own detector rather than sharing one across concurrent invocations.
    """

    def __init__(self, max_dim: int = 480, scale: float = 1.05) -> None:
        self.max_dim = max_dim
        self.scale = scale
        self._hog: Optional[cv2.HOGDescriptor] = None

    def _descriptor(self) -> cv2.HOGDescriptor:
        if self._hog is None:
            hog = cv2.HOGDescriptor()
            hog.setSVMDetector(cv2.HOGDescriptor_getDefaultPeopleDetector())
            self._hog = hog
        return self._hog

    def detect(self, frame: GrayFrame) -> List[Region]:
        gray = frame.pixels
        h, w = gray.shape[:2]
        scale = 1.0
        resized = gray
        if max(h, w) > self.max_dim:
            scale = self.max_dim / float(max(h, w))
            new_w = max(1, int(round(w * scale)))
            new_h = max(1, int(round(h * scale)))
            resized = cv2.resize(gray, (new_w, new_h), interpolation=cv2.INTER_AREA)

        # The default people window is 64x128; smaller inputs cannot match.
        if resized.shape[0] < 128 or resized.shape[1] < 64:
            return []

        rects, _ = self._descriptor().detectMultiScale(
            resized, hitThreshold=0.0, winStride=(8, 8), padding=(16, 16), scale=self.scale,
        )
        inv_scale = 1.0 / scale
        regions = [
            Region(
                x=int(rx * inv_scale),
                y=int(ry * inv_scale),
                width=int(rw * inv_scale),
                height=int(rh * inv_scale),
            )
            for (rx, ry, rw, rh) in rects
        ]
        log.debug("HOG person detector: %d detections on %dx%d", len(regions), w, h)
        return regions
