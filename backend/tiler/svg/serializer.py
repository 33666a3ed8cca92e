"""Write rendered tile elements as SVG polygons."""

from __future__ import annotations

from collections.abc import Sequence

from tiler.engine.context import TileElement


def color_to_hex(color: Sequence[int]) -> str:
    """#rrggbb; grayscale colors repeat their single channel."""
    if len(color) < 3:
        color = (color[0],) * 3 if color else (0, 0, 0)
    return "#{:02x}{:02x}{:02x}".format(*(int(c) for c in color[:3]))


def format_points(points) -> str:
    return " ".join(f"{x:g},{y:g}" for x, y in points)


def serialize_mosaic(
    elements: Sequence[TileElement],
    canvas_w: int,
    canvas_h: int,
    stroke_width: float = 1.0,
) -> str:
    """One filled polygon per element, in the given order. Strokes use the fill color to hide seams."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{canvas_w}" height="{canvas_h}"'
        f' viewBox="0 0 {canvas_w} {canvas_h}">',
    ]

    for elem in elements:
        hex_color = color_to_hex(elem.color)
        style = f"stroke:{hex_color};stroke-width:{stroke_width:g}px;fill:{hex_color};"
        lines.append(f'  <polygon points="{format_points(elem.polygon)}" style="{style}" />')

    lines.append("</svg>")
    return "\n".join(lines)
