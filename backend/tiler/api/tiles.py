"""GET /api/tiles: the tiling catalog."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from tiler.dependencies import get_catalog
from tiler.models.responses import TileListResponse, TileSummary
from tiler.tiles.catalog import Tile

router = APIRouter()


def _summary(tile: Tile) -> TileSummary:
    return TileSummary(
        index=tile.index,
        id=tile.id.name,
        name=tile.name,
        polygon_count=len(tile.polygons),
        width=round(tile.width, 6),
        height=round(tile.height, 6),
        triangular=tile.triangular,
    )


@router.get("/tiles", response_model=TileListResponse)
async def list_tiles(catalog: tuple[Tile, ...] = Depends(get_catalog)) -> TileListResponse:
    return TileListResponse(tiles=[_summary(t) for t in catalog])
