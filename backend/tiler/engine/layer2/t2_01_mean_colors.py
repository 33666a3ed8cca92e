"""T2.01: Mean Colors.

Folds polygons and clipped spans into TileElements, each colored with the
rounded per-channel mean of the source pixels it covers. Without a source
image every element stays black.
"""

from __future__ import annotations

from tiler.engine.context import MosaicContext, TileElement
from tiler.engine.registry import Layer, transform
from tiler.utils.pixels import get_mean_color


@transform(
    id="T2.01",
    layer=Layer.SAMPLING,
    dependencies=["T1.02"],
    description="Sample the mean source color under each polygon",
)
def mean_colors(ctx: MosaicContext) -> None:
    elements: list[TileElement] = []
    for polygon, spans in zip(ctx.polygons, ctx.scanlines):
        if ctx.image is None:
            color: tuple[int, ...] = (0, 0, 0)
        else:
            color = get_mean_color(ctx.image, spans)
        elements.append(TileElement(polygon=polygon, scanlines=spans, color=color))
    ctx.elements = elements
