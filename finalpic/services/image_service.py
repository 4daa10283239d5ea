"""Получение изображений: чтение байтов и декодирование с упаковкой метаданных.

Принципы:
- SRP: класс отвечает только за загрузку и базовое извлечение свойств.
- OCP: новые источники (буфер обмена, URL) сводятся к `decode(bytes)`.
- Ошибка декодирования не показывается пользователю: адаптер `try_load`
  возвращает None, и состояние сеанса остаётся прежним.
"""
from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from finalpic.logger import get_logger
from finalpic.models.image_model import ImageData

log = get_logger("image_service")


class ImageService:
    def decode(self, data: bytes, source: Optional[Path] = None) -> ImageData:
        """Декодирует байты изображения и возвращает его вместе с метаданными.

        Args:
            data: Содержимое файла изображения.
            source: Путь к исходному файлу (только для информации).

        Returns:
            `ImageData` c `PIL.Image.Image` в режиме RGBA.

        Raises:
            ValueError: если данные пусты или формат не поддерживается.
        """
        if not data:
            raise ValueError("Неподдерживаемый формат: пустые данные")

        try:
            with Image.open(io.BytesIO(data)) as opened:
                # convert() forces a full decode while the buffer is still open
                pil_image = opened.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ValueError(f"Неподдерживаемый формат: {source or 'буфер'}") from exc

        width, height = pil_image.size
        return ImageData(
            pil_image=pil_image,
            width=width,
            height=height,
            mode=pil_image.mode,
            size_bytes=width * height * len(pil_image.getbands()),
            path=source,
        )

    def load_image(self, file_path: str | Path) -> ImageData:
        """Читает файл с диска и декодирует его.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ValueError: если файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")
        return self.decode(path.read_bytes(), source=path)

    def try_load(self, file_path: str | Path) -> Optional[ImageData]:
        """Загружает изображение или возвращает None, если это невозможно."""
        try:
            image = self.load_image(file_path)
        except (OSError, ValueError) as exc:
            log.warning("Image not loaded: %s", exc)
            return None
        log.info("Loaded %s (%dx%d)", image.path.name if image.path else "image", image.width, image.height)
        return image
