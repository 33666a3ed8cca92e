"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from tiler.api import health, render, tiles

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(tiles.router)
api_router.include_router(render.router)
