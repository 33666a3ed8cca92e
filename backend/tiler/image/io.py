"""Raster image I/O through Pillow. Buffers are (rows, cols, 3) uint8 RGB arrays."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Output suffix -> Pillow format name
FORMATS = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
}


def _to_array(img: Image.Image) -> NDArray[np.uint8]:
    if img.mode != "RGB":
        logger.debug("converting %s image to RGB", img.mode)
        img = img.convert("RGB")
    return np.array(img, dtype=np.uint8)


def read_image(path: str | Path) -> NDArray[np.uint8]:
    """Load an image file as RGB.

    Raises FileNotFoundError for a missing path and ValueError when the file
    is not a readable image.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"could not open file for reading: {path}")
    try:
        with Image.open(path) as img:
            arr = _to_array(img)
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"could not read image {path}: {e}") from e
    logger.info("read %s (%dx%d)", path, arr.shape[1], arr.shape[0])
    return arr


def decode_image(data: bytes) -> NDArray[np.uint8]:
    """Decode encoded image bytes (PNG, JPEG, ...) as RGB."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            return _to_array(img)
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"could not decode image: {e}") from e


def format_for_path(path: str | Path, default: str = "JPEG") -> str:
    return FORMATS.get(Path(path).suffix.lower(), default)


def encode_image(arr: NDArray[np.uint8], fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(arr)).save(buf, format=fmt.upper())
    return buf.getvalue()


def write_image(path: str | Path, arr: NDArray[np.uint8], fmt: str | None = None) -> None:
    """Write arr to path, format from fmt or the path suffix (JPEG when unknown)."""
    path = Path(path)
    fmt = (fmt or format_for_path(path)).upper()
    try:
        path.write_bytes(encode_image(arr, fmt))
    except OSError as e:
        raise OSError(f"could not open file for writing: {path}") from e
    logger.info("wrote %s", path)
