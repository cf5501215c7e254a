from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from video_picker_scoring.errors import InvalidArgumentError


class PixelFormat(Enum):
    GRAY8 = "gray8"
    RGBA8888 = "rgba8888"
    BGRA8888 = "bgra8888"

    @property
    def bytes_per_pixel(self) -> int:
        return 1 if self is PixelFormat.GRAY8 else 4


@dataclass(frozen=True)
class InputFrame:
    """Caller-owned pixel buffer described by its geometry and layout."""

    width: int
    height: int
    stride_bytes: int
    pixel_format: PixelFormat
    data: Any  # bytes-like or uint8 ndarray


def check_gray_pixels(array: Any) -> None:
    """Raise InvalidArgumentError unless *array* is a non-empty 2-D uint8 array."""
    if not isinstance(array, np.ndarray) or array.ndim != 2 or array.dtype != np.uint8:
        raise InvalidArgumentError("expected a 2-D uint8 array")
    if array.shape[0] <= 0 or array.shape[1] <= 0:
        raise InvalidArgumentError(f"empty frame of shape {array.shape}")


@dataclass(frozen=True, eq=False)
class GrayFrame:
    """Canonical single-channel 8-bit frame; rows are packed (stride == width)."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        check_gray_pixels(self.pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def stride(self) -> int:
        return int(self.pixels.strides[0])

    @classmethod
    def from_array(cls, array: np.ndarray) -> "GrayFrame":
        """Copy a 2-D uint8 array into a canonical frame."""
        check_gray_pixels(array)
        return cls(np.ascontiguousarray(array).copy())
