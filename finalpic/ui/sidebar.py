"""Боковая панель: файл, информация об изображении, выбор фильтра.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: события наружу через `on_*`, синхронизация состояния через `set_*`.
"""
from __future__ import annotations

from typing import Callable, List, Optional

import customtkinter as ctk

from finalpic import config
from finalpic.models.session_state import FilterKind
from finalpic.services.info_service import format_intensity


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, фильтр."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_reset: Optional[Callable[[], None]] = None
        self.on_save: Optional[Callable[[], None]] = None
        self.on_filter_change: Optional[Callable[[FilterKind], None]] = None
        self.on_intensity_change: Optional[Callable[[float], None]] = None

        # File
        self._title = ctk.CTkLabel(self, text="Выбор изображения", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Выбрать изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._reset_btn = ctk.CTkButton(
            self, text="Сброс", fg_color="#d9822b", hover_color="#b86b1f", command=self._emit_reset
        )
        self._reset_btn.grid(row=2, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._save_btn = ctk.CTkButton(
            self, text="Сохранить…", fg_color="#2f9e44", hover_color="#24803a", command=self._emit_save
        )
        self._save_btn.grid(row=3, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section (toggle, like a popover)
        self._info_visible = False
        self._info_btn = ctk.CTkButton(
            self, text="ⓘ Информация", fg_color="transparent", border_width=1, command=self._toggle_info
        )
        self._info_btn.grid(row=4, column=0, padx=8, pady=(0, 4), sticky="ew")

        self._dims_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")

        # Filter section
        self._filter_title = ctk.CTkLabel(self, text="Фильтр", font=ctk.CTkFont(size=16, weight="bold"))
        self._filter_title.grid(row=7, column=0, padx=8, pady=(12, 4), sticky="w")

        self._filter_buttons = ctk.CTkSegmentedButton(
            self,
            values=[kind.label for kind in FilterKind],
            command=self._emit_filter_change,
        )
        self._filter_buttons.set(FilterKind.NONE.label)
        self._filter_buttons.grid(row=8, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._intensity_val = ctk.StringVar(value=format_intensity(config.INTENSITY_DEFAULT))
        self._intensity_label = ctk.CTkLabel(self, textvariable=self._intensity_val, anchor="w")
        self._intensity_slider = ctk.CTkSlider(
            self, from_=0.0, to=1.0, number_of_steps=100, command=self._on_intensity_slider
        )
        self._intensity_slider.set(config.INTENSITY_DEFAULT)
        self._toggle_intensity_controls(visible=False)

        # filler
        self.grid_rowconfigure(99, weight=1)

        self.set_has_image(False)

    # ---- Public API ----
    def set_has_image(self, has_image: bool) -> None:
        """Включает элементы, которые имеют смысл только при наличии изображения."""
        state = "normal" if has_image else "disabled"
        self._reset_btn.configure(state=state)
        self._save_btn.configure(state=state)
        self._info_btn.configure(state=state)
        self._filter_buttons.configure(state=state)
        if not has_image and self._info_visible:
            self._toggle_info()

    def set_image_info(self, lines: List[str]) -> None:
        dims, size = (lines + ["—", "—"])[:2]
        self._dims_val.set(dims)
        self._size_val.set(size)

    def set_filter(self, kind: FilterKind, intensity: float) -> None:
        """Синхронизирует выбор фильтра и слайдер с состоянием (например, после сброса)."""
        self._filter_buttons.set(kind.label)
        self._intensity_slider.set(intensity)
        self._intensity_val.set(format_intensity(intensity))
        self._toggle_intensity_controls(visible=kind is not FilterKind.NONE)

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_reset(self) -> None:
        if self.on_reset:
            self.on_reset()

    def _emit_save(self) -> None:
        if self.on_save:
            self.on_save()

    def _emit_filter_change(self, value: str) -> None:
        kind = FilterKind.from_label(value)
        self._toggle_intensity_controls(visible=kind is not FilterKind.NONE)
        if self.on_filter_change:
            self.on_filter_change(kind)

    def _on_intensity_slider(self, value: float) -> None:
        self._intensity_val.set(format_intensity(value))
        if self.on_intensity_change:
            self.on_intensity_change(float(value))

    # ---- Helpers ----
    def _toggle_info(self) -> None:
        self._info_visible = not self._info_visible
        if self._info_visible:
            self._info_dims.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
            self._info_size.grid(row=6, column=0, padx=8, pady=(0, 6), sticky="ew")
        else:
            self._info_dims.grid_remove()
            self._info_size.grid_remove()

    def _toggle_intensity_controls(self, visible: bool) -> None:
        if visible:
            self._intensity_label.grid(row=9, column=0, padx=8, pady=(4, 2), sticky="w")
            self._intensity_slider.grid(row=10, column=0, padx=8, pady=(0, 8), sticky="ew")
        else:
            self._intensity_label.grid_remove()
            self._intensity_slider.grid_remove()
