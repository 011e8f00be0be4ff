from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from image_ascii.ui.ascii_view import DEFAULT_FONT_SIZE


class BottomBar(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=48, **kwargs)

        # callbacks
        self.on_font_size_change: Optional[Callable[[int], None]] = None

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(4, weight=1)  # status stretches

        # Font size controls
        self._font_label = ctk.CTkLabel(self, text="Шрифт")
        self._font_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._font_value = ctk.StringVar(value=f"{DEFAULT_FONT_SIZE} pt")
        self._font_slider = ctk.CTkSlider(self, from_=4, to=32, number_of_steps=28, width=160, command=self._on_font_slider)
        self._font_slider.set(DEFAULT_FONT_SIZE)
        self._font_slider.grid(row=0, column=1, padx=6, pady=8, sticky="w")
        self._font_value_label = ctk.CTkLabel(self, textvariable=self._font_value, width=48, anchor="w")
        self._font_value_label.grid(row=0, column=2, padx=(6, 12), pady=8, sticky="w")

        # Zoom readout
        self._zoom_value = ctk.StringVar(value="100%")
        self._zoom_value_label = ctk.CTkLabel(self, textvariable=self._zoom_value, width=56, anchor="w")
        self._zoom_value_label.grid(row=0, column=3, padx=(6, 12), pady=8, sticky="w")

        # Status line
        self._status = ctk.StringVar(value="Откройте изображение")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status, anchor="w")
        self._status_label.grid(row=0, column=4, padx=(6, 10), pady=8, sticky="ew")

    # public API (sync from controller)
    def set_zoom_percent(self, percent: int) -> None:
        self._zoom_value.set(f"{percent}%")

    def set_status(self, text: str, error: bool = False) -> None:
        self._status.set(text)
        self._status_label.configure(text_color="#d9534f" if error else ("gray10", "gray90"))

    # events
    def _on_font_slider(self, value: float) -> None:
        size = int(round(value))
        self._font_value.set(f"{size} pt")
        if self.on_font_size_change:
            self.on_font_size_change(size)
