"""Общие фикстуры: небольшие изображения, создаваемые Pillow в памяти."""
from __future__ import annotations

import io

import pytest
from PIL import Image


@pytest.fixture
def rgba_image() -> Image.Image:
    """Цветной градиент 32×16 с непрозрачным альфа-каналом."""
    img = Image.new("RGBA", (32, 16))
    img.putdata([(x * 8, y * 16, 255 - x * 8, 255) for y in range(16) for x in range(32)])
    return img


@pytest.fixture
def checker_image() -> Image.Image:
    """Чёрно-белая шахматка: размытие на ней заметно сразу."""
    img = Image.new("RGBA", (16, 16))
    img.putdata([(255, 255, 255, 255) if (x + y) % 2 else (0, 0, 0, 255) for y in range(16) for x in range(16)])
    return img


@pytest.fixture
def png_bytes(rgba_image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    rgba_image.save(buffer, format="PNG")
    return buffer.getvalue()
