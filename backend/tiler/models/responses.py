"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    tiles_registered: int = 0
    transforms_registered: int = 0


class TileSummary(BaseModel):
    index: int
    # TilingId member name
    id: str
    name: str
    polygon_count: int
    width: float
    height: float
    triangular: bool = False


class TileListResponse(BaseModel):
    tiles: list[TileSummary] = Field(default_factory=list)


class RenderResponse(BaseModel):
    format: str
    width: int
    height: int
    element_count: int = 0
    # SVG markup, or the base64 encoded raster
    data: str
    processing_time_ms: float = 0.0
