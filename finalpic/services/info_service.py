"""Текстовые подписи: информация об изображении, масштаб, интенсивность."""
from __future__ import annotations

from typing import List, Optional

from finalpic.models.image_model import ImageData


def format_dimensions(width: int, height: int) -> str:
    return f"Размер: {width} × {height}"


def format_file_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "Объём: неизвестно"
    return f"Объём: {size_bytes / 1024.0:.1f} KB"


def format_zoom(scale: float) -> str:
    return f"{int(scale * 100)}%"


def format_intensity(intensity: float) -> str:
    return f"Интенсивность: {int(intensity * 100)}%"


def describe(image: Optional[ImageData]) -> List[str]:
    """Строки для информационной панели; прочерки, если изображения нет."""
    if image is None:
        return ["—", "—"]
    return [format_dimensions(image.width, image.height), format_file_size(image.size_bytes)]
