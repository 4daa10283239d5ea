"""Конвейер отрисовки: геометрия вида и фильтр как чистая функция состояния.

Порядок фиксирован: сначала геометрия (вписывание в область, масштаб,
смещение), затем фильтр как независимая попиксельная поправка цвета.
Одинаковые входные данные всегда дают одинаковый результат.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np
from PIL import Image, ImageEnhance, ImageFilter

from finalpic import config
from finalpic.models.session_state import FilterKind, Offset, TransformState

Size = Tuple[int, int]


@dataclass(frozen=True)
class FilterSpec:
    """Фильтр как вариант (вид, параметры); нейтральные значения — без эффекта."""
    kind: FilterKind = FilterKind.NONE
    tint: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    opacity: float = 1.0
    saturation: float = 1.0
    contrast: float = 1.0
    blur_radius: float = 0.0


@dataclass(frozen=True)
class Placement:
    """Размер и левый верхний угол изображения в координатах области просмотра."""
    width: int
    height: int
    x: int
    y: int


@dataclass(frozen=True)
class RenderedFrame:
    image: Image.Image
    placement: Placement


def build_filter_spec(kind: FilterKind, intensity: float) -> FilterSpec:
    """Переводит (вид фильтра, интенсивность) в конкретные параметры эффекта."""
    if kind is FilterKind.SEPIA:
        return FilterSpec(kind=kind, tint=config.SEPIA_TINT, opacity=0.8 + intensity * 0.2)
    if kind is FilterKind.NOIR:
        return FilterSpec(kind=kind, saturation=1.0 - intensity)
    if kind is FilterKind.VIBRANT:
        return FilterSpec(kind=kind, saturation=1.0 + intensity, contrast=1.0 + intensity * 0.5)
    if kind is FilterKind.BLUR:
        return FilterSpec(kind=kind, blur_radius=intensity * config.BLUR_MAX_RADIUS)
    # FilterKind.NONE: intensity is stored but never consulted
    return FilterSpec()


class RenderService:
    # ---- Geometry ----
    def fit_scale(self, image_size: Size, viewport_size: Size) -> float:
        """Коэффициент вписывания изображения в область с сохранением пропорций."""
        img_w, img_h = image_size
        view_w, view_h = viewport_size
        if img_w <= 0 or img_h <= 0 or view_w <= 1 or view_h <= 1:
            return 1.0
        return min(view_w / img_w, view_h / img_h)

    def layout(self, image_size: Size, viewport_size: Size, scale: float, offset: Offset) -> Placement:
        """Размещает изображение: вписать, умножить на масштаб, центрировать, сдвинуть."""
        factor = self.fit_scale(image_size, viewport_size) * scale
        width = max(1, int(round(image_size[0] * factor)))
        height = max(1, int(round(image_size[1] * factor)))
        view_w, view_h = viewport_size
        ox, oy = offset
        x = int(round((view_w - width) / 2 + ox))
        y = int(round((view_h - height) / 2 + oy))
        return Placement(width=width, height=height, x=x, y=y)

    # ---- Filters ----
    def apply_filter(self, image: Image.Image, kind: FilterKind, intensity: float) -> Image.Image:
        """Применяет фильтр к изображению; исходное изображение не изменяется."""
        return self.apply_spec(image, build_filter_spec(kind, intensity))

    def apply_spec(self, image: Image.Image, spec: FilterSpec) -> Image.Image:
        if spec.kind is FilterKind.NONE:
            return image.copy()

        out = image if image.mode == "RGBA" else image.convert("RGBA")
        if spec.tint != (1.0, 1.0, 1.0) or spec.opacity != 1.0:
            out = self._tint(out, spec.tint, spec.opacity)
        out = self._enhance(ImageEnhance.Color, out, spec.saturation)
        out = self._enhance(ImageEnhance.Contrast, out, spec.contrast)
        if spec.blur_radius > 0:
            out = out.filter(ImageFilter.GaussianBlur(radius=spec.blur_radius))
        return out if out is not image else image.copy()

    def render_frame(self, image: Image.Image, transform: TransformState, viewport_size: Size) -> RenderedFrame:
        """Строит кадр для экрана из изображения и текущего состояния вида."""
        placement = self.layout(image.size, viewport_size, transform.scale, transform.offset)
        if (placement.width, placement.height) == image.size:
            resized = image
        else:
            resized = image.resize((placement.width, placement.height), Image.Resampling.LANCZOS)
        # blur radius is measured in screen pixels, so filter after resizing
        filtered = self.apply_filter(resized, transform.filter_kind, transform.intensity)
        return RenderedFrame(image=filtered, placement=placement)

    # ---- Helpers ----
    def _tint(self, image: Image.Image, tint: Tuple[float, float, float], opacity: float) -> Image.Image:
        """Умножает RGB на оттенок и альфа-канал на непрозрачность."""
        arr = np.asarray(image, dtype=np.float32).copy()
        arr[..., :3] *= np.asarray(tint, dtype=np.float32)
        arr[..., 3] *= opacity
        out = np.clip(np.rint(arr), 0, 255).astype(np.uint8)
        return Image.fromarray(out)

    def _enhance(
        self,
        enhancer: Callable[[Image.Image], ImageEnhance._Enhance],
        image: Image.Image,
        factor: float,
    ) -> Image.Image:
        if factor == 1.0:
            return image
        return enhancer(image).enhance(factor)
