"""Mosaic tiling engine."""

from tiler.engine.registry import transform, Layer, get_registry
from tiler.engine.context import MosaicContext, TileElement
from tiler.engine.pipeline import Pipeline, create_pipeline

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "MosaicContext",
    "TileElement",
    "Pipeline",
    "create_pipeline",
]
