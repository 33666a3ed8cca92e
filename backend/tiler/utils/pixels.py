"""Per-span pixel statistics and fills on a (rows, cols, channels) uint8 buffer.

The buffer belongs to the caller. Spans must already be clipped to it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from tiler.utils.math_helpers import round_half_away
from tiler.utils.rasterizer import Scanline


def get_mean(img: NDArray[np.uint8], scanlines: Iterable[Scanline], channel: int = 0) -> int:
    """Rounded mean of one channel over the covered pixels; 0 when nothing is covered."""
    total = 0
    count = 0
    for s in scanlines:
        row = img[s.y, s.x : s.x + s.len, channel]
        total += int(row.sum(dtype=np.int64))
        count += s.len
    if count == 0:
        return 0
    return round_half_away(total / count)


def get_mean_color(img: NDArray[np.uint8], scanlines: Sequence[Scanline]) -> tuple[int, ...]:
    channels = img.shape[2] if img.ndim == 3 else 1
    if img.ndim == 2:
        img = img[:, :, np.newaxis]
    return tuple(get_mean(img, scanlines, c) for c in range(channels))


def fill(img: NDArray[np.uint8], scanlines: Iterable[Scanline], value: int, channel: int = 0) -> None:
    for s in scanlines:
        img[s.y, s.x : s.x + s.len, channel] = value


def fill_color(img: NDArray[np.uint8], scanlines: Iterable[Scanline], color: Sequence[int]) -> None:
    """Write every channel of color into the covered pixels."""
    value = np.asarray(color, dtype=img.dtype)
    for s in scanlines:
        img[s.y, s.x : s.x + s.len] = value
