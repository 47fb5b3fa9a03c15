"""Pytest configuration and fixtures."""

import pytest
from PIL import Image


@pytest.fixture
def white_image():
    """16x8 white image."""
    return Image.new("RGB", (16, 8), color="white")


@pytest.fixture
def black_image():
    """16x8 black image."""
    return Image.new("RGB", (16, 8), color="black")


@pytest.fixture
def striped_image():
    """8x3 image with rows white, black, black."""
    image = Image.new("1", (8, 3), color=1)
    pixels = image.load()
    for y in (1, 2):
        for x in range(8):
            pixels[x, y] = 0
    return image
