"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tiler.dependencies import get_catalog
from tiler.engine.registry import get_registry
from tiler.models.responses import HealthResponse
from tiler.tiles.catalog import Tile

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(catalog: tuple[Tile, ...] = Depends(get_catalog)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        tiles_registered=len(catalog),
        transforms_registered=get_registry().count,
    )
