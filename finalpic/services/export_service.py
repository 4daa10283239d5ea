"""Экспорт изображения на диск в PNG или JPEG.

Сохраняется исходный декодированный растр: фильтры и масштаб — только
предпросмотр и в файл не попадают. Запись атомарна с точки зрения
вызывающего: файл либо появляется целиком, либо не появляется вовсе.
"""
from __future__ import annotations

import io
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image

from finalpic import config
from finalpic.logger import get_logger

log = get_logger("export_service")


def export_format_for(path: str | Path) -> str:
    """Определяет формат по расширению: .jpg/.jpeg -> JPEG, всё остальное -> PNG."""
    suffix = Path(path).suffix.lower()
    if suffix in (".jpg", ".jpeg"):
        return "JPEG"
    return "PNG"


def _target_mode(path: Path) -> int:
    """Права существующего файла, иначе 0o666 с учётом umask."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


@dataclass(frozen=True)
class ExportResult:
    """Итог сохранения для модального сообщения пользователю."""
    ok: bool
    path: Path
    error: Optional[str] = None

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def message(self) -> str:
        if self.ok:
            return f"Изображение сохранено: {self.file_name}"
        return f"Не удалось сохранить изображение: {self.error}"


class ExportService:
    def encode(self, image: Image.Image, fmt: str) -> bytes:
        """Кодирует изображение в память в указанном формате."""
        buffer = io.BytesIO()
        if fmt == "JPEG":
            # JPEG has no alpha channel
            rgb = image if image.mode == "RGB" else image.convert("RGB")
            rgb.save(buffer, format="JPEG", quality=config.JPEG_QUALITY)
        else:
            image.save(buffer, format="PNG")
        return buffer.getvalue()

    def save(self, image: Image.Image, file_path: str | Path) -> ExportResult:
        """Сохраняет изображение; ошибки возвращаются в результате, без повторов."""
        path = Path(file_path)
        fmt = export_format_for(path)
        try:
            data = self.encode(image, fmt)
            self._write_atomic(path, data)
        except (OSError, ValueError) as exc:
            reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
            log.error("Export to %s failed: %s", path, reason)
            return ExportResult(ok=False, path=path, error=reason)
        log.info("Exported %s as %s (%d bytes)", path.name, fmt, len(data))
        return ExportResult(ok=True, path=path)

    def _write_atomic(self, path: Path, data: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            # mkstemp creates 0600; use the usual permissions of a new/overwritten file
            os.chmod(tmp_name, _target_mode(path))
            os.replace(tmp_name, path)
        except OSError:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
