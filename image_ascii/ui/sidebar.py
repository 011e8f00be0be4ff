"""Боковая панель: открытие файла, информация, параметры преобразования, экспорт.

Принципы:
- SRP: управляет только UI параметров, не содержит алгоритмов.
- ISP: выдаёт параметры через компактные методы `get_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from image_ascii.models.ascii_model import DEFAULT_EDGE_SENSITIVITY, DEFAULT_TARGET_WIDTH
from image_ascii.models.image_model import ImageData

PREVIEW_MODES = ("Нет", "Яркость", "Границы")

SENSITIVITY_RANGE = (0, 500)
WIDTH_RANGE = (20, 300)


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, преобразование, результат."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_settings_change: Optional[Callable[[], None]] = None
        self.on_preview_change: Optional[Callable[[str], None]] = None
        self.on_copy: Optional[Callable[[], None]] = None
        self.on_save: Optional[Callable[[], None]] = None

        # File
        self._title = ctk.CTkLabel(self, text="Изображение", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._mode_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_mode = ctk.CTkLabel(self, textvariable=self._mode_val, anchor="w", justify="left")

        self._info_path.grid(row=2, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_mode.grid(row=5, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Преобразование
        self._conv_title = ctk.CTkLabel(self, text="Преобразование", font=ctk.CTkFont(size=16, weight="bold"))
        self._conv_title.grid(row=6, column=0, padx=8, pady=(8, 4), sticky="w")

        self._width_val = ctk.StringVar(value=str(DEFAULT_TARGET_WIDTH))
        self._width_label = ctk.CTkLabel(self, text="Ширина (символов):")
        self._width_slider = ctk.CTkSlider(
            self,
            from_=WIDTH_RANGE[0],
            to=WIDTH_RANGE[1],
            number_of_steps=WIDTH_RANGE[1] - WIDTH_RANGE[0],
            command=self._on_width_change,
        )
        self._width_slider.set(DEFAULT_TARGET_WIDTH)
        self._width_value = ctk.CTkLabel(self, textvariable=self._width_val, width=48, anchor="w")
        self._width_label.grid(row=7, column=0, padx=8, pady=(0, 2), sticky="w")
        self._width_slider.grid(row=8, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._width_value.grid(row=9, column=0, padx=8, pady=(0, 8), sticky="w")

        self._edges_var = ctk.BooleanVar(value=False)
        self._edges_switch = ctk.CTkSwitch(
            self, text="Границы (Собель)", variable=self._edges_var, command=self._on_edges_toggle
        )
        self._edges_switch.grid(row=10, column=0, padx=8, pady=(4, 6), sticky="w")

        self._sens_val = ctk.StringVar(value=f"{DEFAULT_EDGE_SENSITIVITY:g}")
        self._sens_label = ctk.CTkLabel(self, text="Чувствительность (порог):")
        self._sens_slider = ctk.CTkSlider(
            self,
            from_=SENSITIVITY_RANGE[0],
            to=SENSITIVITY_RANGE[1],
            number_of_steps=SENSITIVITY_RANGE[1] - SENSITIVITY_RANGE[0],
            command=self._on_sensitivity_change,
        )
        self._sens_slider.set(DEFAULT_EDGE_SENSITIVITY)
        self._sens_value = ctk.CTkLabel(self, textvariable=self._sens_val, width=48, anchor="w")
        self._sens_label.grid(row=11, column=0, padx=8, pady=(0, 2), sticky="w")
        self._sens_slider.grid(row=12, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._sens_value.grid(row=13, column=0, padx=8, pady=(0, 8), sticky="w")

        # Просмотр: что наложить на исходник
        self._preview_label = ctk.CTkLabel(self, text="Просмотр:")
        self._preview_menu = ctk.CTkOptionMenu(self, values=list(PREVIEW_MODES), command=self._emit_preview_change)
        self._preview_menu.set(PREVIEW_MODES[0])
        self._preview_label.grid(row=14, column=0, padx=8, pady=(4, 2), sticky="w")
        self._preview_menu.grid(row=15, column=0, padx=8, pady=(0, 10), sticky="w")

        # filler
        self.grid_rowconfigure(99, weight=1)

        # Результат
        self._copy_btn = ctk.CTkButton(self, text="Копировать текст", command=self._emit_copy)
        self._copy_btn.grid(row=100, column=0, padx=8, pady=(0, 6), sticky="ew")
        self._save_btn = ctk.CTkButton(self, text="Сохранить .txt…", command=self._emit_save)
        self._save_btn.grid(row=101, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Public API ----
    def set_image_info(self, image_data: ImageData) -> None:
        """Отображает метаданные загруженного изображения."""
        self._path_val.set(str(image_data.path))
        self._size_val.set(self._format_size(image_data.size_bytes))
        self._dims_val.set(f"{image_data.width} × {image_data.height} px")
        self._mode_val.set(image_data.mode)

    def get_conversion_params(self) -> Tuple[int, bool, float]:
        """Возвращает (target_width, enable_edge_detection, edge_sensitivity)."""
        try:
            width = int(round(self._width_slider.get()))
        except (TypeError, ValueError):
            width = DEFAULT_TARGET_WIDTH
        width = max(WIDTH_RANGE[0], min(WIDTH_RANGE[1], width))
        try:
            sensitivity = float(round(self._sens_slider.get()))
        except (TypeError, ValueError):
            sensitivity = DEFAULT_EDGE_SENSITIVITY
        return width, bool(self._edges_var.get()), sensitivity

    def get_preview_mode(self) -> str:
        """'Нет' | 'Яркость' | 'Границы'."""
        return self._preview_menu.get()

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_settings_change(self) -> None:
        if self.on_settings_change:
            self.on_settings_change()

    def _on_width_change(self, value: float) -> None:
        self._width_val.set(f"{int(round(value))}")
        self._emit_settings_change()

    def _on_sensitivity_change(self, value: float) -> None:
        self._sens_val.set(f"{int(round(value))}")
        self._emit_settings_change()

    def _on_edges_toggle(self) -> None:
        self._emit_settings_change()

    def _emit_preview_change(self, value: str) -> None:
        if self.on_preview_change:
            self.on_preview_change(value)

    def _emit_copy(self) -> None:
        if self.on_copy:
            self.on_copy()

    def _emit_save(self) -> None:
        if self.on_save:
            self.on_save()

    # ---- Helpers ----
    def _format_size(self, size_bytes: Optional[int]) -> str:
        if size_bytes is None:
            return "—"
        thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
        for label, limit in thresholds:
            if size_bytes < limit:
                if label == "Б":
                    return f"{size_bytes} {label}"
                value = size_bytes / (limit // 1024)
                return f"{value:.1f} {label}"
        value = size_bytes / (1024**4)
        return f"{value:.1f} ГБ"
