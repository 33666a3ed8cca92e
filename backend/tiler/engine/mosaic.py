"""Render entry points: build a context from an image and run the pipeline over it."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from tiler.engine.config import PipelineConfig
from tiler.engine.context import MosaicContext, TileElement
from tiler.engine.pipeline import Pipeline, create_pipeline
from tiler.tiles.catalog import Tile
from tiler.utils.pixels import fill_color
from tiler.utils.rasterizer import draw_lines

logger = logging.getLogger(__name__)

OUTLINE_COLOR = (212, 212, 212)


def create_context(
    image: NDArray[np.uint8],
    tile: Tile,
    scale: float,
    angle: float,
    offset: tuple[float, float] = (0.0, 0.0),
) -> MosaicContext:
    """Context for tiling the whole image, lattice centered on the image plus offset.

    Raises ValueError for a scale that is not a positive finite number, an
    angle or offset that is not finite, or an image that is not a
    (rows, cols, channels) uint8 array.
    """
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError(f"the tile scale must be positive and finite, got {scale}")
    if not math.isfinite(angle):
        raise ValueError(f"the tile angle must be finite, got {angle}")
    if not all(math.isfinite(v) for v in offset):
        raise ValueError(f"the lattice offset must be finite, got {offset}")
    if image.ndim != 3 or image.dtype != np.uint8:
        raise ValueError("image is not 8 bit RGB")
    rows, cols = image.shape[:2]
    origin = (cols / 2.0 + offset[0], rows / 2.0 + offset[1])
    return MosaicContext(
        tile=tile,
        rows=rows,
        cols=cols,
        origin=origin,
        scale=scale,
        angle=angle,
        image=image,
    )


def get_image_elements(
    image: NDArray[np.uint8],
    tile: Tile,
    scale: float,
    angle: float,
    offset: tuple[float, float] = (0.0, 0.0),
    pipeline: Pipeline | None = None,
    config: PipelineConfig | None = None,
) -> list[TileElement]:
    """Colored tile polygons covering the image, in instantiation order."""
    ctx = create_context(image, tile, scale, angle, offset)
    pipeline = pipeline or create_pipeline(config)
    pipeline.run(ctx)
    return ctx.elements


def paint_elements(
    shape: Sequence[int],
    elements: Sequence[TileElement],
    outline: bool = False,
) -> NDArray[np.uint8]:
    """Fill a fresh black buffer with each element's color, later elements on top.

    With outline, polygon edges are stroked over the fills.
    """
    out = np.zeros(tuple(shape), dtype=np.uint8)
    for e in elements:
        fill_color(out, e.scanlines, e.color)
    if outline:
        color = OUTLINE_COLOR[: out.shape[2]]
        for e in elements:
            draw_lines(out, e.polygon, color)
    logger.debug("painted %d elements into %s buffer", len(elements), "x".join(map(str, shape)))
    return out
