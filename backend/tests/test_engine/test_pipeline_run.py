"""Tests for the pipeline orchestrator over the registered mosaic stages."""

import numpy as np
import pytest

from tests.conftest import CATALOG, uniform_image
from tiler.engine.context import MosaicContext
from tiler.engine.mosaic import create_context
from tiler.engine.pipeline import Pipeline, create_pipeline
from tiler.engine.registry import Layer, TransformRegistry, TransformSpec


def _ctx() -> MosaicContext:
    return MosaicContext(tile=CATALOG[0], rows=4, cols=4)


def test_pipeline_runs_transforms_in_order():
    reg = TransformRegistry()
    results = []

    def t1(ctx: MosaicContext) -> None:
        results.append("t1")

    def t2(ctx: MosaicContext) -> None:
        results.append("t2")

    reg.register(TransformSpec(id="T0.02", layer=Layer.LAYOUT, fn=t2, dependencies=["T0.01"]))
    reg.register(TransformSpec(id="T0.01", layer=Layer.LAYOUT, fn=t1))

    ctx = Pipeline(registry=reg).run(_ctx())

    assert results == ["t1", "t2"]
    assert ctx.completed_transforms == {"T0.01", "T0.02"}
    assert set(ctx.timings) == {"T0.01", "T0.02"}


def test_pipeline_propagates_errors():
    reg = TransformRegistry()
    ran = []

    def fail(ctx: MosaicContext) -> None:
        raise ValueError("test error")

    reg.register(TransformSpec(id="T0.01", layer=Layer.LAYOUT, fn=fail))
    reg.register(TransformSpec(id="T0.02", layer=Layer.LAYOUT, fn=lambda c: ran.append(1), dependencies=["T0.01"]))

    ctx = _ctx()
    with pytest.raises(ValueError, match="test error"):
        Pipeline(registry=reg).run(ctx)
    assert ran == []
    assert "T0.01" not in ctx.completed_transforms


def test_run_layer_only_touches_that_layer():
    ctx = create_context(uniform_image(32, 32), CATALOG[0], 8, 0)
    pipeline = create_pipeline()
    pipeline.run_layer(ctx, Layer.LAYOUT)
    assert ctx.completed_transforms == {"T0.01", "T0.02", "T0.03"}
    assert ctx.num_polygons > 0
    assert ctx.scanlines == []
    assert ctx.elements == []


def test_full_run_fills_context():
    ctx = create_context(uniform_image(32, 48), CATALOG[5], 6, 15)
    create_pipeline().run(ctx)
    assert len(ctx.locations) > 0
    assert len(ctx.elements) == ctx.num_polygons == len(ctx.scanlines)
    assert all(e.color == (230, 120, 30) for e in ctx.elements if e.scanlines)
    assert all(e.color == (0, 0, 0) for e in ctx.elements if not e.scanlines)


def test_geometry_only_run_leaves_elements_black():
    ctx = MosaicContext(tile=CATALOG[6], rows=20, cols=20, origin=(10, 10), scale=5)
    create_pipeline().run(ctx)
    assert ctx.elements
    assert {e.color for e in ctx.elements} == {(0, 0, 0)}


def test_scanline_precision_comes_from_config():
    from tiler.engine.config import PipelineConfig

    ctx = create_context(uniform_image(16, 16), CATALOG[0], 4, 0)
    create_pipeline(PipelineConfig(scanline_precision=100)).run(ctx)
    assert ctx.config.scanline_precision == 100
    covered = np.zeros((16, 16), dtype=int)
    for e in ctx.elements:
        for s in e.scanlines:
            covered[s.y, s.x : s.x + s.len] += 1
    assert (covered == 1).all()
