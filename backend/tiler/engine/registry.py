"""Transform registry: every pipeline stage is a standalone function registered via decorator.

Usage:
    @transform(id="T1.01", layer=Layer.RASTER, dependencies=["T0.03"])
    def polygon_scanlines(ctx: MosaicContext) -> None:
        ctx.scanlines = [get_convex_polygon_scanlines(p) for p in ctx.polygons]

Adding a stage = creating one file with the decorator under a layerN package.
"""

from __future__ import annotations

import enum
import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from tiler.engine.context import MosaicContext

logger = logging.getLogger(__name__)


class Layer(enum.IntEnum):
    LAYOUT = 0
    RASTER = 1
    SAMPLING = 2


@dataclass
class TransformSpec:
    id: str
    layer: Layer
    fn: Callable[["MosaicContext"], None]
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class TransformRegistry:
    """Registry of pipeline stages keyed by id."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"transform {spec.id} is already registered")
        self._transforms[spec.id] = spec
        logger.debug("stage %s registered in layer %s", spec.id, spec.layer.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def get_layer(self, layer: Layer) -> list[TransformSpec]:
        specs = [s for s in self._transforms.values() if s.layer == layer]
        return sorted(specs, key=lambda s: s.id)

    def _with_dependencies(self, requested_ids: set[str]) -> dict[str, TransformSpec]:
        """Requested stages plus everything they transitively depend on."""
        keep: set[str] = set()
        pending = list(requested_ids)
        while pending:
            tid = pending.pop()
            if tid in keep or tid not in self._transforms:
                continue
            keep.add(tid)
            pending.extend(self._transforms[tid].dependencies)
        return {tid: s for tid, s in self._transforms.items() if tid in keep}

    def resolve_order(self, requested_ids: set[str] | None = None) -> list[TransformSpec]:
        """Dependency order (Kahn), ties broken by id. None means every stage."""
        pool = self._transforms if requested_ids is None else self._with_dependencies(requested_ids)

        waiting: dict[str, int] = {}
        dependents: dict[str, list[str]] = {tid: [] for tid in pool}
        for tid, spec in pool.items():
            deps = [d for d in spec.dependencies if d in pool]
            waiting[tid] = len(deps)
            for dep in deps:
                dependents[dep].append(tid)

        ready = [tid for tid, n in waiting.items() if n == 0]
        heapq.heapify(ready)
        ordered: list[TransformSpec] = []
        while ready:
            tid = heapq.heappop(ready)
            ordered.append(pool[tid])
            for nxt in dependents[tid]:
                waiting[nxt] -= 1
                if waiting[nxt] == 0:
                    heapq.heappush(ready, nxt)

        if len(ordered) != len(pool):
            stuck = sorted(set(pool) - {s.id for s in ordered})
            raise ValueError(f"Circular dependency detected among: {stuck}")
        return ordered

    @property
    def count(self) -> int:
        return len(self._transforms)


# Stages register here on import; see tiler.engine.pipeline.register_transforms
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    layer: Layer,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Register the decorated function as pipeline stage `id`."""

    def decorator(fn: Callable[["MosaicContext"], None]):
        _registry.register(TransformSpec(id, layer, fn, list(dependencies or ()), description))
        return fn

    return decorator
