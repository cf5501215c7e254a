from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Union

import cv2
import numpy as np

from video_picker_scoring.errors import DecodeError
from video_picker_scoring.frames.models import GrayFrame

log = logging.getLogger("video_picker_scoring")

_TIME_TOLERANCE_S = 1e-6


def _downscale(gray: np.ndarray, target_short_side: int) -> np.ndarray:
    h, w = gray.shape[:2]
    short = min(h, w)
    if target_short_side <= 0 or short <= target_short_side:
        return gray
    scale = target_short_side / float(short)
    size = (max(1, int(round(w * scale))), max(1, int(round(h * scale))))
    return cv2.resize(gray, size, interpolation=cv2.INTER_AREA)


def iter_sampled_frames(
    video_path: Union[str, Path],
    sampling_fps: float,
    max_frames: int,
    start_time_s: float = 0.0,
    target_short_side: int = 0,
) -> Iterator[GrayFrame]:
    """Decode *video_path* and yield grayscale frames sampled at *sampling_fps*.

    A frame is admitted once its timestamp reaches the next sampling
    instant.  Stops after *max_frames* samples or at end of stream.
    """
    if max_frames <= 0:
        return

    cap = cv2.VideoCapture(str(video_path))
    if not cap.isOpened():
        raise DecodeError(f"Failed to open video {video_path}")

    try:
        if start_time_s > 0:
            cap.set(cv2.CAP_PROP_POS_MSEC, start_time_s * 1000.0)

        interval_s = 1.0 / sampling_fps
        next_sample_s = start_time_s
        sampled = 0

        while sampled < max_frames:
            ok, frame = cap.read()
            if not ok:
                break
            ts_s = cap.get(cv2.CAP_PROP_POS_MSEC) / 1000.0
            if ts_s + _TIME_TOLERANCE_S < next_sample_s:
                continue

            if frame.ndim == 2:
                gray = frame
            else:
                gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
            gray = _downscale(gray, target_short_side)

            yield GrayFrame(np.ascontiguousarray(gray))
            sampled += 1
            next_sample_s += interval_s

        log.info("Sampled %d frames from %s at %.2f fps", sampled, Path(video_path).name, sampling_fps)
    finally:
        cap.release()
