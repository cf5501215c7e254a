from __future__ import annotations

import numpy as np

from video_picker_scoring.errors import AllocError, InvalidArgumentError, UnsupportedError
from video_picker_scoring.frames.models import GrayFrame, InputFrame, PixelFormat

# BT.601 luma weights in thousandths
_LUMA_R = 299
_LUMA_G = 587
_LUMA_B = 114

# Channel offsets (R, G, B) inside one 4-byte pixel
_CHANNEL_ORDER = {
    PixelFormat.RGBA8888: (0, 1, 2),
    PixelFormat.BGRA8888: (2, 1, 0),
}


def _as_byte_view(data) -> np.ndarray:
    if isinstance(data, np.ndarray):
        if data.dtype != np.uint8:
            raise InvalidArgumentError(f"expected uint8 buffer, got {data.dtype}")
        return np.ascontiguousarray(data).reshape(-1)
    try:
        return np.frombuffer(data, dtype=np.uint8)
    except TypeError as exc:
        raise InvalidArgumentError(f"unsupported buffer type: {type(data).__name__}") from exc


def to_gray_frame(frame: InputFrame) -> GrayFrame:
    """Convert *frame* into a packed 8-bit grayscale frame.

    Four-channel input uses ``Y = (299 R + 587 G + 114 B) // 1000``; single
    channel input is copied row by row honouring ``stride_bytes``.  The
    result never aliases the caller's buffer.
    """
    if frame is None or frame.data is None:
        raise InvalidArgumentError("frame buffer is missing")
    if frame.width <= 0 or frame.height <= 0:
        raise InvalidArgumentError(f"invalid frame size {frame.width}x{frame.height}")
    if not isinstance(frame.pixel_format, PixelFormat):
        raise UnsupportedError(f"unsupported pixel format: {frame.pixel_format!r}")

    bpp = frame.pixel_format.bytes_per_pixel
    row_bytes = frame.width * bpp
    if frame.stride_bytes < row_bytes:
        raise InvalidArgumentError(
            f"stride {frame.stride_bytes} is smaller than row size {row_bytes}"
        )

    buf = _as_byte_view(frame.data)
    needed = frame.stride_bytes * (frame.height - 1) + row_bytes
    if buf.size < needed:
        raise InvalidArgumentError(f"buffer holds {buf.size} bytes, need {needed}")

    rows = np.lib.stride_tricks.as_strided(
        buf, shape=(frame.height, row_bytes), strides=(frame.stride_bytes, 1), writeable=False,
    )

    try:
        if frame.pixel_format is PixelFormat.GRAY8:
            gray = rows.copy()
        else:
            pixels = rows.reshape(frame.height, frame.width, 4)
            ri, gi, bi = _CHANNEL_ORDER[frame.pixel_format]
            luma = (
                _LUMA_R * pixels[:, :, ri].astype(np.uint32)
                + _LUMA_G * pixels[:, :, gi].astype(np.uint32)
                + _LUMA_B * pixels[:, :, bi].astype(np.uint32)
            ) // 1000
            gray = luma.astype(np.uint8)
    except MemoryError as exc:
        raise AllocError(
            f"could not allocate {frame.width}x{frame.height} grayscale buffer"
        ) from exc

    return GrayFrame(np.ascontiguousarray(gray))
