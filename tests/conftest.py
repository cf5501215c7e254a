"""Shared helpers for analyzer tests."""
from __future__ import annotations

from typing import List, Optional, Sequence

import cv2
import numpy as np

from video_picker_scoring.frames.models import GrayFrame, InputFrame, PixelFormat


# ---------------------------------------------------------------------------
# Grayscale frame generators
# ---------------------------------------------------------------------------

def uniform_gray(h: int, w: int, value: int = 128) -> GrayFrame:
    """Constant-value frame (no edges, no noise)."""
    return GrayFrame(np.full((h, w), value, dtype=np.uint8))


def noise_gray(h: int = 64, w: int = 64, *, seed: int = 0) -> GrayFrame:
    """Uniform random noise: very sharp and very noisy."""
    rng = np.random.RandomState(seed)
    return GrayFrame(rng.randint(0, 256, (h, w), dtype=np.uint8))


def checkerboard_gray(h: int = 64, w: int = 64, cell: int = 8) -> GrayFrame:
    """Black/white checkerboard with *cell*-pixel squares."""
    yy, xx = np.mgrid[0:h, 0:w]
    board = (((yy // cell) + (xx // cell)) % 2 * 255).astype(np.uint8)
    return GrayFrame(board)


def blurred(frame: GrayFrame, ksize: int = 9, sigma: float = 5.0) -> GrayFrame:
    return GrayFrame(cv2.GaussianBlur(frame.pixels, (ksize, ksize), sigma))


# ---------------------------------------------------------------------------
# Input frame builders
# ---------------------------------------------------------------------------

def gray_input(pixels: np.ndarray, stride: Optional[int] = None) -> InputFrame:
    """Wrap a 2-D uint8 array as a GRAY8 input frame, padding rows to *stride*."""
    h, w = pixels.shape
    stride = stride or w
    buf = np.zeros((h, stride), dtype=np.uint8)
    buf[:, :w] = pixels
    return InputFrame(w, h, stride, PixelFormat.GRAY8, buf.tobytes())


def rgba_input(
    r: int, g: int, b: int, h: int = 2, w: int = 2,
    fmt: PixelFormat = PixelFormat.RGBA8888,
) -> InputFrame:
    """Solid-colour four-channel input frame in *fmt* channel order."""
    if fmt is PixelFormat.RGBA8888:
        px = (r, g, b, 255)
    else:
        px = (b, g, r, 255)
    data = np.tile(np.array(px, dtype=np.uint8), h * w).tobytes()
    return InputFrame(w, h, w * 4, fmt, data)


def uniform_inputs(count: int, h: int = 4, w: int = 4, value: int = 128) -> List[InputFrame]:
    return [gray_input(np.full((h, w), value, dtype=np.uint8)) for _ in range(count)]


# ---------------------------------------------------------------------------
# Fake cv2.VideoCapture
# ---------------------------------------------------------------------------

class FakeCapture:
    """Stand-in for ``cv2.VideoCapture`` replaying in-memory BGR frames."""

    def __init__(self, frames: Sequence[np.ndarray], fps: float = 30.0, opened: bool = True):
        self._frames = list(frames)
        self._fps = fps
        self._opened = opened
        self._pos = 0
        self.released = False
        self.seeks: List[float] = []

    def isOpened(self) -> bool:
        return self._opened

    def read(self):
        if self._pos >= len(self._frames):
            return False, None
        frame = self._frames[self._pos]
        self._pos += 1
        return True, frame

    def get(self, prop):
        if prop == cv2.CAP_PROP_POS_MSEC:
            return (self._pos - 1) * 1000.0 / self._fps
        if prop == cv2.CAP_PROP_FPS:
            return self._fps
        return 0.0

    def set(self, prop, value):
        if prop == cv2.CAP_PROP_POS_MSEC:
            self.seeks.append(value)
            self._pos = int(round(value / 1000.0 * self._fps))
        return True

    def release(self):
        self.released = True


def bgr_frames(count: int, h: int = 48, w: int = 64, *, seed: int = 0) -> List[np.ndarray]:
    """*count* random-noise BGR frames whose first pixel encodes the index."""
    rng = np.random.RandomState(seed)
    frames = []
    for i in range(count):
        img = rng.randint(0, 256, (h, w, 3), dtype=np.uint8)
        img[0, 0] = (i, i, i)
        frames.append(img)
    return frames
