"""Shared test fixtures."""

from __future__ import annotations

import io

import numpy as np
import pytest
from PIL import Image

from tiler.engine.pipeline import register_transforms
from tiler.tiles.catalog import create_tile_catalog

register_transforms()

CATALOG = create_tile_catalog()

# Pentagon with non-integer vertices; rounds to (0,0),(20,0),(20,11),(6,20),(-3,8)
PENTAGON = [(0.1, 0.2), (20.0, 0.3), (20.3, 10.9), (5.7, 20.3), (-3.2, 7.6)]

ORANGE = (230, 120, 30)


def uniform_image(rows: int, cols: int, color=ORANGE) -> np.ndarray:
    img = np.zeros((rows, cols, 3), dtype=np.uint8)
    img[:, :] = color
    return img


def gradient_image(rows: int = 48, cols: int = 64) -> np.ndarray:
    """Red ramps along x, green along y, blue constant."""
    img = np.zeros((rows, cols, 3), dtype=np.uint8)
    img[:, :, 0] = np.linspace(0, 255, cols, dtype=np.uint8)[np.newaxis, :]
    img[:, :, 1] = np.linspace(0, 255, rows, dtype=np.uint8)[:, np.newaxis]
    img[:, :, 2] = 90
    return img


def png_bytes(img: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(img).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def catalog():
    return CATALOG


@pytest.fixture
def square4(catalog):
    return catalog[0]


@pytest.fixture
def orange_image() -> np.ndarray:
    return uniform_image(48, 64)


@pytest.fixture
def gradient() -> np.ndarray:
    return gradient_image()
