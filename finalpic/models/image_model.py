"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель декодированного изображения и его метаданные.

    Изображение заменяется целиком при новом выборе файла, частично не меняется.

    Fields:
        pil_image: Декодированное изображение PIL (RGBA).
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL, например "RGBA".
        size_bytes: Объём растра в памяти (ширина × высота × каналы).
        path: Путь к исходному файлу, если изображение пришло с диска.
    """
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]
    path: Optional[Path] = None

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height
