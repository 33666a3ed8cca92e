"""POST /api/render: tile an uploaded image."""

from __future__ import annotations

import base64
import binascii
import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from tiler.config import Settings
from tiler.dependencies import get_catalog, get_pipeline, get_settings
from tiler.engine.pipeline import Pipeline
from tiler.image.io import decode_image
from tiler.models.requests import RenderRequest
from tiler.models.responses import RenderResponse
from tiler.render import RenderOptions, render_mosaic
from tiler.tiles.catalog import Tile, get_tile

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/render", response_model=RenderResponse)
def render(
    req: RenderRequest,
    catalog: tuple[Tile, ...] = Depends(get_catalog),
    pipeline: Pipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_settings),
) -> RenderResponse:
    start = time.perf_counter()

    try:
        raw = base64.b64decode(req.image, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"image is not valid base64: {e}") from e

    try:
        tile = get_tile(catalog, req.tile)
        image = decode_image(raw)
        rows, cols = image.shape[:2]
        if rows * cols > settings.max_image_pixels:
            raise ValueError(f"image too large: {cols}x{rows} exceeds {settings.max_image_pixels} pixels")
        options = RenderOptions(
            scale=req.scale,
            angle=req.angle,
            offset=(req.x_offset, req.y_offset),
            order=req.order,
            outline=req.outline,
            shuffle=req.shuffle,
            seed=req.seed,
        )
        result = render_mosaic(
            image, tile, req.format, options, pipeline=pipeline, min_scale=settings.min_tile_scale
        )
    except ValueError as e:
        logger.info("render rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    if isinstance(result.data, str):
        data = result.data
    else:
        data = base64.b64encode(result.data).decode("ascii")

    elapsed = (time.perf_counter() - start) * 1000
    return RenderResponse(
        format=result.format.value,
        width=result.width,
        height=result.height,
        element_count=len(result.elements),
        data=data,
        processing_time_ms=round(elapsed, 1),
    )
