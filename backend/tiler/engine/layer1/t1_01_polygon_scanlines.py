"""T1.01: Polygon Scanlines.

Exact pixel coverage of each convex polygon as horizontal spans, from
integer edge intersections over every edge pair.
"""

from __future__ import annotations

from tiler.engine.context import MosaicContext
from tiler.engine.layout import get_polygon_scanlines
from tiler.engine.registry import Layer, transform


@transform(
    id="T1.01",
    layer=Layer.RASTER,
    dependencies=["T0.03"],
    description="Rasterize each polygon into scanlines",
)
def polygon_scanlines(ctx: MosaicContext) -> None:
    ctx.scanlines = get_polygon_scanlines(ctx.polygons, ctx.config.scanline_precision)
