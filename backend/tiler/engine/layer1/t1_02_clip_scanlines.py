"""T1.02: Clip Scanlines.

Restricts every polygon's spans to the window rectangle.
"""

from __future__ import annotations

import logging

from tiler.engine.context import MosaicContext
from tiler.engine.layout import clip_scanlines
from tiler.engine.registry import Layer, transform
from tiler.utils.rasterizer import scanline_area

logger = logging.getLogger(__name__)


@transform(
    id="T1.02",
    layer=Layer.RASTER,
    dependencies=["T1.01"],
    description="Clip scanlines to the window",
)
def clipped_scanlines(ctx: MosaicContext) -> None:
    ctx.scanlines = clip_scanlines(ctx.cols, ctx.rows, ctx.scanlines)
    logger.debug(
        "groups of scanlines: %d, covered pixels: %d",
        len(ctx.scanlines),
        sum(scanline_area(s) for s in ctx.scanlines),
    )
