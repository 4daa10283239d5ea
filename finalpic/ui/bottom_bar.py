from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from finalpic import config
from finalpic.services.info_service import format_zoom


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=64, **kwargs)

        # callbacks
        self.on_zoom_step: Optional[Callable[[float], None]] = None

        # layout: title | spacer | [-] value [+] | spacer
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=1)
        self.grid_columnconfigure(5, weight=1)

        self._zoom_label = ctk.CTkLabel(self, text="Масштаб", font=ctk.CTkFont(size=14, weight="bold"))
        self._zoom_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._zoom_out_btn = ctk.CTkButton(
            self, text="−", width=40, command=lambda: self._emit_step(-config.SCALE_STEP)
        )
        self._zoom_out_btn.grid(row=0, column=2, padx=6, pady=8)

        self._zoom_value = ctk.StringVar(value=format_zoom(config.SCALE_DEFAULT))
        self._zoom_value_label = ctk.CTkLabel(self, textvariable=self._zoom_value, width=60)
        self._zoom_value_label.grid(row=0, column=3, padx=6, pady=8)

        self._zoom_in_btn = ctk.CTkButton(
            self, text="+", width=40, command=lambda: self._emit_step(config.SCALE_STEP)
        )
        self._zoom_in_btn.grid(row=0, column=4, padx=6, pady=8)

        self.set_enabled(False)

    # public API (sync from controller)
    def set_zoom(self, scale: float) -> None:
        self._zoom_value.set(format_zoom(scale))

    def set_enabled(self, enabled: bool) -> None:
        state = "normal" if enabled else "disabled"
        self._zoom_out_btn.configure(state=state)
        self._zoom_in_btn.configure(state=state)

    # events
    def _emit_step(self, delta: float) -> None:
        if self.on_zoom_step:
            self.on_zoom_step(delta)
