"""Presentation ordering of rendered elements.

The pipeline emits elements in instantiation order (lattice origins outer,
catalog polygons inner). Anything else is a presentation choice made after
the run: a sort key, or a color shuffle.
"""

from __future__ import annotations

import enum
import math
import random
from collections.abc import Callable, Sequence
from dataclasses import replace

from tiler.engine.context import TileElement
from tiler.utils.math_helpers import luminance

ElementKey = Callable[[TileElement], float]


class Order(str, enum.Enum):
    INSTANTIATION = "instantiation"
    CENTER = "center"
    LUMINANCE = "luminance"


def by_distance_from(center: tuple[float, float]) -> ElementKey:
    """Key: distance from an element's vertex mean to center."""
    cx, cy = center

    def key(e: TileElement) -> float:
        x, y = e.center
        return math.hypot(x - cx, y - cy)

    return key


def by_luminance(e: TileElement) -> float:
    return luminance(e.color)


def order_elements(
    elements: Sequence[TileElement],
    key: ElementKey | None = None,
    reverse: bool = False,
) -> list[TileElement]:
    """Stable sort by key; no key keeps instantiation order."""
    if key is None:
        return list(reversed(elements)) if reverse else list(elements)
    return sorted(elements, key=key, reverse=reverse)


def key_for(order: Order | str, width: int, height: int) -> ElementKey | None:
    order = Order(order)
    if order is Order.CENTER:
        return by_distance_from((width / 2.0, height / 2.0))
    if order is Order.LUMINANCE:
        return by_luminance
    return None


def shuffle_colors(elements: Sequence[TileElement], seed: int | None = None) -> list[TileElement]:
    """Same polygons, colors randomly permuted between them."""
    rng = random.Random(seed)
    colors = [e.color for e in elements]
    rng.shuffle(colors)
    return [replace(e, color=c) for e, c in zip(elements, colors)]
