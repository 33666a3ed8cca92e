"""Pipeline orchestrator: runs stages in dependency order and times each one."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from tiler.engine.config import PipelineConfig
from tiler.engine.context import MosaicContext
from tiler.engine.registry import Layer, TransformRegistry, TransformSpec, get_registry

logger = logging.getLogger(__name__)

_LAYER_PACKAGES = ("layer0", "layer1", "layer2")


def register_transforms() -> None:
    """Import all stage modules so @transform decorators fire. Safe to call repeatedly."""
    for layer_name in _LAYER_PACKAGES:
        package_name = f"tiler.engine.{layer_name}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


class Pipeline:
    """Orchestrates the stage pipeline."""

    def __init__(
        self,
        registry: TransformRegistry | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.registry = registry or get_registry()
        self.config = config or PipelineConfig()

    def run(self, ctx: MosaicContext) -> MosaicContext:
        """Run every registered stage on the given context.

        A failing stage is logged and its exception propagates; later stages
        never see a half-built context.
        """
        start = time.perf_counter()
        ctx.config = self.config

        ordered = self.registry.resolve_order()
        logger.info("mosaic pipeline: %d stages for tile %s", len(ordered), ctx.tile.name)

        for spec in ordered:
            self._run_one(spec, ctx)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "mosaic pipeline done: %d stages, %d polygons, %d elements in %.0fms",
            len(ctx.completed_transforms),
            ctx.num_polygons,
            len(ctx.elements),
            total,
        )
        return ctx

    def run_layer(self, ctx: MosaicContext, layer: Layer) -> MosaicContext:
        """Run only transforms in a specific layer."""
        ctx.config = self.config
        for spec in self.registry.get_layer(layer):
            self._run_one(spec, ctx)
        return ctx

    def _run_one(self, spec: TransformSpec, ctx: MosaicContext) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
        except Exception as e:
            logger.warning("stage %s failed: %s", spec.id, e)
            raise
        ctx.completed_transforms.add(spec.id)
        elapsed = (time.perf_counter() - t0) * 1000
        ctx.timings[spec.id] = elapsed
        logger.debug("stage %s took %.1fms", spec.id, elapsed)


def create_pipeline(config: PipelineConfig | None = None) -> Pipeline:
    """Factory for a pipeline over the global registry, with all stages loaded."""
    register_transforms()
    return Pipeline(config=config)
