"""Виджет просмотра исходного изображения и превью в разрешении сетки символов.

Принципы:
- SRP: отвечает только за представление изображения.
- Превью (яркость/границы) имеет размер сетки и растягивается без
  сглаживания, чтобы были видны отдельные ячейки.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

MIN_SCALE = 0.1
MAX_SCALE = 4.0


class ImageViewer(ctk.CTkFrame):
    """Канва с исходником; удержание пробела показывает исходник вместо превью."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._original_image: Optional[Image.Image] = None
        self._processed_image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None

        self._scale_factor: float = 1.0
        self._user_zoomed: bool = False
        self._hold_before_active: bool = False

        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._canvas.bind("<Configure>", self._on_canvas_resize)
        self._canvas.bind("<MouseWheel>", self._on_mouse_wheel)      # Windows/macOS
        self._canvas.bind("<Button-4>", self._on_mouse_wheel_linux)  # Linux scroll up
        self._canvas.bind("<Button-5>", self._on_mouse_wheel_linux)  # Linux scroll down
        self._canvas.bind("<ButtonPress-1>", lambda _e: self._canvas.focus_set())
        self._canvas.bind("<KeyPress-space>", self._on_space_down)
        self._canvas.bind("<KeyRelease-space>", self._on_space_up)

    # ---- Public API ----
    def set_image(self, image: Image.Image) -> None:
        """Устанавливает исходное изображение и сбрасывает масштаб."""
        self._original_image = image
        self._processed_image = None
        self.set_zoom_to_fit()

    def set_processed_image(self, image: Optional[Image.Image]) -> None:
        """Устанавливает превью (может быть None) и перерисовывает виджет."""
        self._processed_image = image
        self._render_image()

    def set_zoom_to_fit(self) -> None:
        """Масштабирует изображение так, чтобы оно целиком помещалось в канву."""
        self._user_zoomed = False
        self._scale_factor = self._compute_fit_scale()
        self._render_image()

    def get_zoom_percent(self) -> int:
        return int(round(self._scale_factor * 100))

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        if self._original_image is None:
            return
        if not self._user_zoomed:
            self._scale_factor = self._compute_fit_scale()
        self._render_image()

    def _render_image(self) -> None:
        self._canvas.delete("all")
        if self._original_image is None:
            return

        canvas_w = int(self._canvas.winfo_width())
        canvas_h = int(self._canvas.winfo_height())
        img_w, img_h = self._original_image.size
        scaled_w = max(1, int(img_w * self._scale_factor))
        scaled_h = max(1, int(img_h * self._scale_factor))

        if self._processed_image is not None and not self._hold_before_active:
            draw_img = self._processed_image.resize((scaled_w, scaled_h), Image.Resampling.NEAREST)
        else:
            draw_img = self._original_image.resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)

        x = (canvas_w - scaled_w) // 2 if scaled_w <= canvas_w else 0
        y = (canvas_h - scaled_h) // 2 if scaled_h <= canvas_h else 0
        self._tk_image = ImageTk.PhotoImage(draw_img)
        self._canvas.create_image(x, y, image=self._tk_image, anchor="nw")

    def _compute_fit_scale(self) -> float:
        if self._original_image is None:
            return 1.0
        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))
        img_w, img_h = self._original_image.size
        if img_w == 0 or img_h == 0:
            return 1.0
        return max(MIN_SCALE, min(MAX_SCALE, min(canvas_w / img_w, canvas_h / img_h)))

    def _get_canvas_bg(self) -> str:
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    # ---- Mouse wheel zoom ----
    def _on_mouse_wheel(self, event: tk.Event) -> None:
        if event.delta == 0:
            return
        self._zoom_by(1.1 if event.delta > 0 else 1.0 / 1.1)

    def _on_mouse_wheel_linux(self, event: tk.Event) -> None:
        # On X11, Button-4 is up, Button-5 is down
        self._zoom_by(1.1 if getattr(event, "num", None) == 4 else 1.0 / 1.1)

    def _zoom_by(self, factor: float) -> None:
        if self._original_image is None:
            return
        new_scale = max(MIN_SCALE, min(MAX_SCALE, self._scale_factor * factor))
        if abs(new_scale - self._scale_factor) < 1e-6:
            return
        self._scale_factor = new_scale
        self._user_zoomed = True
        self._render_image()
        if self.on_zoom_change:
            self.on_zoom_change(self.get_zoom_percent())

    # ---- Hold space to preview the source ----
    def _on_space_down(self, _event: tk.Event) -> None:
        if not self._hold_before_active:
            self._hold_before_active = True
            self._render_image()

    def _on_space_up(self, _event: tk.Event) -> None:
        if self._hold_before_active:
            self._hold_before_active = False
            self._render_image()
