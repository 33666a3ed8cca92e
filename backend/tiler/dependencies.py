"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Request

from tiler.config import Settings, settings
from tiler.engine.pipeline import Pipeline, create_pipeline
from tiler.tiles.catalog import Tile


def get_settings() -> Settings:
    return settings


def get_catalog(request: Request) -> tuple[Tile, ...]:
    """The catalog built by create_app()."""
    return request.app.state.catalog


def get_pipeline() -> Pipeline:
    return create_pipeline()
