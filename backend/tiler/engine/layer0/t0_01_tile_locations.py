"""T0.01: Tile Locations.

Lattice origins covering the rotated, scaled window. Inverse-maps the window
corners into tile space, walks the padded integer grid there and maps each
grid point back.
"""

from __future__ import annotations

import logging

from tiler.engine.context import MosaicContext
from tiler.engine.layout import get_tile_locations
from tiler.engine.registry import Layer, transform

logger = logging.getLogger(__name__)


@transform(
    id="T0.01",
    layer=Layer.LAYOUT,
    description="Enumerate lattice origins covering the window",
)
def tile_locations(ctx: MosaicContext) -> None:
    ctx.locations = get_tile_locations(
        ctx.rows,
        ctx.cols,
        ctx.origin,
        ctx.tile_width,
        ctx.tile_height,
        ctx.angle,
        ctx.tile.triangular,
        padding=ctx.config.lattice_padding,
    )
    logger.info("tile locations: %d", len(ctx.locations))
