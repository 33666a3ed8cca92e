"""Pipeline configuration: numeric knobs of the layout and raster stages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PipelineConfig:
    """Controls lattice coverage and scanline precision."""

    # Fixed-point scale for edge slopes in the scanline rasterizer
    scanline_precision: int = 10_000

    # Extra lattice cells around the window, in tile units
    lattice_padding: float = 1.0
