"""Pytest configuration and fixtures."""

import io

import pytest
from PIL import Image

BLACK = (0, 0, 0)


def _png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    """Encode an image as PNG."""
    return _png_bytes


@pytest.fixture
def half_black_image() -> Image.Image:
    """8x2 image, left four columns black, right four white."""
    image = Image.new("RGB", (8, 2), color="white")
    pixels = image.load()
    for y in range(2):
        for x in range(4):
            pixels[x, y] = BLACK
    return image
