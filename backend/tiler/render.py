"""Render a source image into a finished mosaic: raster bytes or SVG text.

Shared by the CLI and the HTTP API.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from tiler.engine.context import TileElement
from tiler.engine.mosaic import get_image_elements, paint_elements
from tiler.engine.ordering import Order, key_for, order_elements, shuffle_colors
from tiler.engine.pipeline import Pipeline
from tiler.image.io import encode_image
from tiler.svg.serializer import serialize_mosaic
from tiler.tiles.catalog import Tile

logger = logging.getLogger(__name__)


class OutputFormat(str, enum.Enum):
    PNG = "png"
    JPEG = "jpeg"
    SVG = "svg"


@dataclass
class RenderOptions:
    scale: float = 16.0
    angle: float = 10.0
    offset: tuple[float, float] = (0.0, 0.0)
    order: Order = Order.INSTANTIATION
    outline: bool = False
    shuffle: bool = False
    seed: int | None = None


@dataclass
class RenderOutput:
    format: OutputFormat
    width: int
    height: int
    elements: list[TileElement] = field(default_factory=list)
    # Encoded raster for png/jpeg, markup for svg
    data: bytes | str = b""


def render_elements(
    image: NDArray[np.uint8],
    tile: Tile,
    options: RenderOptions,
    pipeline: Pipeline | None = None,
) -> list[TileElement]:
    """Run the pipeline, then apply color shuffling and presentation order."""
    elements = get_image_elements(
        image, tile, options.scale, options.angle, options.offset, pipeline=pipeline
    )
    if options.shuffle:
        elements = shuffle_colors(elements, options.seed)
    rows, cols = image.shape[:2]
    return order_elements(elements, key_for(options.order, cols, rows))


def render_mosaic(
    image: NDArray[np.uint8],
    tile: Tile,
    fmt: OutputFormat | str = OutputFormat.PNG,
    options: RenderOptions | None = None,
    pipeline: Pipeline | None = None,
    min_scale: float = 0.0,
) -> RenderOutput:
    """Render a mosaic. Scales in (0, min_scale) are rejected with ValueError."""
    fmt = OutputFormat(fmt)
    options = options or RenderOptions()
    if 0 < options.scale < min_scale:
        raise ValueError(f"the tile scale must be at least {min_scale:g}, got {options.scale:g}")
    rows, cols = image.shape[:2]
    elements = render_elements(image, tile, options, pipeline)

    data: bytes | str
    if fmt is OutputFormat.SVG:
        data = serialize_mosaic(elements, cols, rows)
    else:
        out = paint_elements(image.shape, elements, outline=options.outline)
        data = encode_image(out, fmt.value)

    logger.info(
        "rendered %s with %s: %d elements as %s",
        "x".join(map(str, (cols, rows))),
        tile.name,
        len(elements),
        fmt.value,
    )
    return RenderOutput(format=fmt, width=cols, height=rows, elements=elements, data=data)
