"""Виджет просмотра изображения: отображение готового кадра и жесты.

Принципы:
- SRP: виджет не хранит масштаб и смещение — он только рисует кадр,
  полученный от контроллера, и сообщает о жестах через колбэки `on_*`.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import ImageTk

from finalpic import config
from finalpic.services.render_service import RenderedFrame


class ImageViewer(ctk.CTkFrame):
    """Канва с изображением; перетаскивание — панорама, колесо — масштаб."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg(), height=400)
        self._canvas.grid(row=0, column=0, sticky="nsew")

        # keep a reference, otherwise Tk drops the bitmap
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._has_image: bool = False

        # drag state: translation is measured from the press point
        self._drag_start_xy: Optional[Tuple[int, int]] = None

        self.on_drag_begin: Optional[Callable[[], None]] = None
        self.on_drag_update: Optional[Callable[[Tuple[float, float]], None]] = None
        self.on_drag_end: Optional[Callable[[], None]] = None
        self.on_zoom_factor: Optional[Callable[[float], None]] = None
        self.on_resize: Optional[Callable[[], None]] = None

        self._canvas.bind("<Configure>", self._on_canvas_resize)

        # Mouse wheel zoom (cross-platform)
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel)      # Windows/macOS
        self._canvas.bind("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self._canvas.bind("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down

        # Panning with left mouse drag
        self._canvas.bind("<ButtonPress-1>", self._on_pan_start)
        self._canvas.bind("<B1-Motion>", self._on_pan_move)
        self._canvas.bind("<ButtonRelease-1>", self._on_pan_end)

        self.show_placeholder()

    # ---- Public API ----
    def viewport_size(self) -> Tuple[int, int]:
        """Текущий размер области просмотра, px."""
        return max(1, int(self._canvas.winfo_width())), max(1, int(self._canvas.winfo_height()))

    def show_frame(self, frame: RenderedFrame) -> None:
        """Рисует готовый кадр в позиции, рассчитанной конвейером отрисовки."""
        self._has_image = True
        self._canvas.delete("all")
        self._tk_image = ImageTk.PhotoImage(frame.image)
        self._canvas.create_image(frame.placement.x, frame.placement.y, image=self._tk_image, anchor="nw")

    def show_placeholder(self) -> None:
        """Пустое состояние: подсказка выбрать изображение."""
        self._has_image = False
        self._tk_image = None
        self._canvas.delete("all")
        w, h = self.viewport_size()
        self._canvas.create_text(
            w // 2,
            h // 2,
            text="Выберите изображение",
            fill="#8a8a8a",
            font=("TkDefaultFont", 18),
        )

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        if not self._has_image:
            self.show_placeholder()
            return
        if self.on_resize:
            self.on_resize()

    def _get_canvas_bg(self) -> str:
        # CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    # ---- Mouse wheel zoom ----
    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if not self._has_image or event.delta == 0:
            return
        factor = config.WHEEL_ZOOM_FACTOR if event.delta > 0 else 1.0 / config.WHEEL_ZOOM_FACTOR
        self._emit_zoom(factor)

    def _on_mouse_wheel_linux(self, event: tk.Event) -> None:
        # On X11, Button-4 is up, Button-5 is down
        if not self._has_image:
            return
        if getattr(event, "num", None) == 4:
            factor = config.WHEEL_ZOOM_FACTOR
        else:
            factor = 1.0 / config.WHEEL_ZOOM_FACTOR
        self._emit_zoom(factor)

    def _emit_zoom(self, factor: float) -> None:
        if self.on_zoom_factor:
            self.on_zoom_factor(factor)

    # ---- Panning ----
    def _on_pan_start(self, event: tk.Event) -> None:
        if not self._has_image:
            return
        self._canvas.focus_set()
        self._drag_start_xy = (event.x, event.y)
        if self.on_drag_begin:
            self.on_drag_begin()

    def _on_pan_move(self, event: tk.Event) -> None:
        if self._drag_start_xy is None:
            return
        sx, sy = self._drag_start_xy
        if self.on_drag_update:
            self.on_drag_update((float(event.x - sx), float(event.y - sy)))

    def _on_pan_end(self, _event: tk.Event) -> None:
        if self._drag_start_xy is None:
            return
        self._drag_start_xy = None
        if self.on_drag_end:
            self.on_drag_end()
