"""T0.03: Overlapping Polygons.

Drops polygons whose rounded bounding box misses the window. Coarse: a
polygon that survives can still rasterize to nothing inside the window.
"""

from __future__ import annotations

import logging

from tiler.engine.context import MosaicContext
from tiler.engine.layout import get_overlapping_polygons
from tiler.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


@transform(
    id="T0.03",
    layer=Layer.LAYOUT,
    dependencies=["T0.02"],
    description="Keep polygons whose bounding box overlaps the window",
)
def overlapping_polygons(ctx: MosaicContext) -> None:
    before = len(ctx.polygons)
    ctx.polygons = get_overlapping_polygons(ctx.cols, ctx.rows, ctx.polygons)
    logger.info("unclipped polygons: %d, overlapping window: %d", before, len(ctx.polygons))
