"""Контроллер приложения: оркестрация UI, состояния сеанса и сервисов.

SOLID:
- SRP: класс связывает UI и сервисы, сам не обрабатывает пиксели.
- DIP: зависит от сервисов как от ролей; конкретные реализации инкапсулированы.
Clean Code:
- Каждый обработчик мутирует состояние и явно вызывает перерисовку.
"""
from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from tkinter import TclError, filedialog, messagebox
from typing import Optional, Tuple

import customtkinter as ctk

from finalpic import config
from finalpic.logger import get_logger
from finalpic.models.image_model import ImageData
from finalpic.models.session_state import FilterKind, SessionState
from finalpic.services import info_service
from finalpic.services.export_service import ExportResult, ExportService
from finalpic.services.image_service import ImageService
from finalpic.services.render_service import RenderService
from finalpic.services.task_runner import TaskRunner
from finalpic.ui.bottom_bar import BottomBar
from finalpic.ui.image_viewer import ImageViewer
from finalpic.ui.sidebar import Sidebar

log = get_logger("controller")


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Мутации `SessionState` по жестам и элементам управления.
    - Перерисовка через `RenderService` после каждой мутации.
    - Загрузка и экспорт в рабочем потоке через `TaskRunner`.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    session: SessionState = field(default_factory=SessionState)
    _image_service: ImageService = field(default_factory=ImageService)
    _render_service: RenderService = field(default_factory=RenderService)
    _export_service: ExportService = field(default_factory=ExportService)
    _runner: Optional[TaskRunner] = None

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self._runner = TaskRunner(self.window)

        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_reset = self._handle_reset
        self.sidebar.on_save = self._handle_save
        self.sidebar.on_filter_change = self._handle_filter_change
        self.sidebar.on_intensity_change = self._handle_intensity_change

        self.viewer.on_drag_begin = self._handle_drag_begin
        self.viewer.on_drag_update = self._handle_drag_update
        self.viewer.on_drag_end = self._handle_drag_end
        self.viewer.on_zoom_factor = self._handle_zoom_factor
        self.viewer.on_resize = self._render

        self.bottom.on_zoom_step = self._handle_zoom_step

    def shutdown(self) -> None:
        if self._runner is not None:
            self._runner.shutdown()

    # ---- Image acquisition ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=config.OPEN_FILETYPES,
            )
        except TclError as exc:
            log.warning("Open dialog unavailable: %s", exc)
            return

        if not file_path:
            return

        log.debug("Decoding %s", file_path)
        self._runner.submit(lambda: self._image_service.try_load(file_path), self._on_image_loaded)

    def _on_image_loaded(self, future: Future) -> None:
        try:
            image: Optional[ImageData] = future.result()
        except Exception:
            log.exception("Image loading failed")
            return
        if not self.session.accept_image(image):
            # cancelled or undecodable: keep showing the previous image
            return
        self._sync_controls()
        self._render()

    def _handle_reset(self) -> None:
        log.debug("Reset session")
        self.session.reset()
        self._sync_controls()
        self._render()

    # ---- Export ----
    def _handle_save(self) -> None:
        image = self.session.image
        if image is None:
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить изображение",
                initialfile=config.DEFAULT_EXPORT_NAME,
                defaultextension=".png",
                filetypes=config.EXPORT_FILETYPES,
            )
        except TclError as exc:
            log.warning("Save dialog unavailable: %s", exc)
            return

        if not file_path:
            return

        # only the decoded bitmap is exported; filters stay a preview
        self._runner.submit(
            lambda: self._export_service.save(image.pil_image, file_path),
            self._on_export_done,
        )

    def _on_export_done(self, future: Future) -> None:
        try:
            result: ExportResult = future.result()
        except Exception as exc:
            log.exception("Export failed")
            messagebox.showerror("Ошибка сохранения", f"Не удалось сохранить изображение: {exc}", parent=self.window)
            return
        if result.ok:
            messagebox.showinfo("Сохранено", result.message, parent=self.window)
        else:
            messagebox.showerror("Ошибка сохранения", result.message, parent=self.window)

    # ---- Gestures & controls ----
    def _handle_drag_begin(self) -> None:
        self.session.transform.begin_drag()

    def _handle_drag_update(self, translation: Tuple[float, float]) -> None:
        self.session.transform.update_drag(translation)
        self._render()

    def _handle_drag_end(self) -> None:
        self.session.transform.end_drag()

    def _handle_zoom_factor(self, factor: float) -> None:
        transform = self.session.transform
        transform.set_scale(transform.scale * factor)
        self._after_zoom()

    def _handle_zoom_step(self, delta: float) -> None:
        self.session.transform.step_scale(delta)
        self._after_zoom()

    def _handle_filter_change(self, kind: FilterKind) -> None:
        log.debug("Filter -> %s", kind.name)
        self.session.transform.set_filter(kind)
        self._render()

    def _handle_intensity_change(self, value: float) -> None:
        self.session.transform.set_intensity(value)
        self._render()

    # ---- Helpers ----
    def _after_zoom(self) -> None:
        self.bottom.set_zoom(self.session.transform.scale)
        self._render()

    def _sync_controls(self) -> None:
        """Приводит элементы управления в соответствие с состоянием сеанса."""
        transform = self.session.transform
        has_image = self.session.has_image
        self.sidebar.set_has_image(has_image)
        self.sidebar.set_image_info(info_service.describe(self.session.image))
        self.sidebar.set_filter(transform.filter_kind, transform.intensity)
        self.bottom.set_enabled(has_image)
        self.bottom.set_zoom(transform.scale)

    def _render(self) -> None:
        image = self.session.image
        if image is None:
            self.viewer.show_placeholder()
            return
        frame = self._render_service.render_frame(
            image.pil_image, self.session.transform, self.viewer.viewport_size()
        )
        self.viewer.show_frame(frame)
