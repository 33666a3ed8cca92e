"""T0.02: Tiled Polygons.

Every catalog polygon scaled, rotated and moved onto every lattice origin.
"""

from __future__ import annotations

from tiler.engine.context import MosaicContext
from tiler.engine.layout import get_tiled_polygons
from tiler.engine.registry import Layer, transform


@transform(
    id="T0.02",
    layer=Layer.LAYOUT,
    dependencies=["T0.01"],
    description="Instantiate catalog polygons at each lattice origin",
)
def tiled_polygons(ctx: MosaicContext) -> None:
    ctx.polygons = get_tiled_polygons(ctx.locations, ctx.tile.polygons, ctx.scale, ctx.angle)
