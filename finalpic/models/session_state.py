"""Состояние сеанса редактирования: трансформации вида и текущее изображение.

Принципы:
- SRP: только данные и их мутации, без UI и без обработки пикселей.
- Все операции тотальные: входные значения зажимаются в допустимый диапазон,
  исключения не выбрасываются.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from finalpic import config
from finalpic.models.image_model import ImageData

Offset = Tuple[float, float]


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


class FilterKind(Enum):
    """Закрытый набор фильтров; значение — подпись в интерфейсе."""
    NONE = "Без фильтра"
    SEPIA = "Сепия"
    NOIR = "Ч/Б"
    VIBRANT = "Яркий"
    BLUR = "Размытие"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> "FilterKind":
        for kind in cls:
            if kind.value == label:
                return kind
        return cls.NONE


@dataclass
class TransformState:
    """Параметры вида: масштаб, смещение, фильтр и его интенсивность.

    Смещение хранится в двух частях: `committed_offset` — база, зафиксированная
    по окончании предыдущего перетаскивания, и `offset` — текущее (живое)
    значение, равное базе плюс перемещение активного жеста.
    """
    scale: float = config.SCALE_DEFAULT
    offset: Offset = (0.0, 0.0)
    committed_offset: Offset = (0.0, 0.0)
    filter_kind: FilterKind = FilterKind.NONE
    intensity: float = config.INTENSITY_DEFAULT
    dragging: bool = False

    # ---- Scale ----
    def set_scale(self, scale: float) -> None:
        """Устанавливает масштаб, зажимая его в [0.1, 5.0]."""
        self.scale = _clamp(float(scale), config.SCALE_MIN, config.SCALE_MAX)

    def step_scale(self, delta: float) -> None:
        """Изменяет масштаб на `delta` (кнопки ±) с зажатием в диапазон."""
        # round() keeps repeated ±0.1 steps on the 0.01 grid
        stepped = round(self.scale + delta, 2)
        self.scale = _clamp(stepped, config.SCALE_MIN, config.SCALE_MAX)

    @property
    def zoom_percent(self) -> int:
        return int(self.scale * 100)

    # ---- Drag ----
    def begin_drag(self) -> None:
        self.dragging = True
        self.offset = self.committed_offset

    def update_drag(self, translation: Offset) -> None:
        """Живое смещение = зафиксированная база + перемещение жеста."""
        if not self.dragging:
            self.begin_drag()
        tx, ty = translation
        bx, by = self.committed_offset
        self.offset = (bx + tx, by + ty)

    def end_drag(self) -> None:
        """Фиксирует живое смещение как базу для следующего жеста."""
        if not self.dragging:
            return
        self.committed_offset = self.offset
        self.dragging = False

    # ---- Filter ----
    def set_filter(self, kind: FilterKind) -> None:
        self.filter_kind = kind

    def set_intensity(self, value: float) -> None:
        # stored even for FilterKind.NONE; the render pipeline ignores it there
        self.intensity = _clamp(float(value), 0.0, 1.0)

    def reset(self) -> None:
        """Возвращает все параметры вида к значениям по умолчанию."""
        self.scale = config.SCALE_DEFAULT
        self.offset = (0.0, 0.0)
        self.committed_offset = (0.0, 0.0)
        self.filter_kind = FilterKind.NONE
        self.intensity = config.INTENSITY_DEFAULT
        self.dragging = False


@dataclass
class SessionState:
    """Изображение сеанса и связанное с ним состояние вида.

    Параметры вида имеют смысл только при наличии изображения; при новом
    изображении и при сбросе они атомарно возвращаются к умолчаниям.
    """
    image: Optional[ImageData] = None
    transform: TransformState = field(default_factory=TransformState)

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def accept_image(self, image: Optional[ImageData]) -> bool:
        """Принимает результат выбора файла.

        Returns:
            True, если изображение заменено (и вид сброшен); False, если выбор
            отменён или данные не декодировались — тогда состояние не меняется.
        """
        if image is None:
            return False
        self.image = image
        self.transform.reset()
        return True

    def reset(self) -> None:
        """Кнопка «Сброс»: убирает изображение и сбрасывает вид."""
        self.image = None
        self.transform.reset()
