"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from tiler.config import settings
from tiler.engine.ordering import Order
from tiler.render import OutputFormat


class RenderRequest(BaseModel):
    image: str = Field(..., description="Base64 encoded source image (PNG, JPEG, ...)")
    tile: int | str = Field(default=settings.default_tile_index, description="Tiling index or name")
    scale: float = Field(default=settings.default_scale, description="Tile scale in pixels")
    angle: float = Field(default=settings.default_angle, description="Tile rotation in degrees")
    x_offset: float = Field(default=0.0, description="Lattice origin x offset in pixels")
    y_offset: float = Field(default=0.0, description="Lattice origin y offset in pixels")
    format: OutputFormat = Field(default=OutputFormat.PNG, description="Output format")
    order: Order = Field(default=Order.INSTANTIATION, description="Drawing order of the tiles")
    outline: bool = Field(default=False, description="Stroke tile outlines (raster output only)")
    shuffle: bool = Field(default=False, description="Randomly permute tile colors")
    seed: int | None = Field(default=None, description="Seed for shuffle")
