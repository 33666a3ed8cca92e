"""Tests for Pillow-backed image reading and writing."""

import numpy as np
import pytest
from PIL import Image

from tests.conftest import gradient_image, png_bytes
from tiler.image.io import decode_image, encode_image, format_for_path, read_image, write_image


def test_png_file_round_trip(tmp_path):
    img = gradient_image(12, 20)
    path = tmp_path / "g.png"
    write_image(path, img)
    assert np.array_equal(read_image(path), img)


def test_jpeg_is_written_for_unknown_suffix(tmp_path):
    path = tmp_path / "out.bin"
    write_image(path, gradient_image(8, 8))
    with Image.open(path) as im:
        assert im.format == "JPEG"


def test_format_for_path():
    assert format_for_path("a.PNG") == "PNG"
    assert format_for_path("a.jpeg") == "JPEG"
    assert format_for_path("a.tiff") == "JPEG"


def test_grayscale_and_alpha_are_converted_to_rgb(tmp_path):
    path = tmp_path / "la.png"
    Image.new("LA", (5, 3), (100, 50)).save(path)
    arr = read_image(path)
    assert arr.shape == (3, 5, 3)
    assert arr.dtype == np.uint8
    assert tuple(arr[0, 0]) == (100, 100, 100)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_image(tmp_path / "nope.png")


def test_not_an_image(tmp_path):
    path = tmp_path / "text.png"
    path.write_text("hello")
    with pytest.raises(ValueError, match="could not read image"):
        read_image(path)


def test_decode_bytes():
    img = gradient_image(6, 9)
    assert np.array_equal(decode_image(png_bytes(img)), img)
    with pytest.raises(ValueError):
        decode_image(b"\x00\x01garbage")


def test_encode_jpeg_bytes():
    data = encode_image(gradient_image(8, 8), "jpeg")
    assert data[:2] == b"\xff\xd8"
