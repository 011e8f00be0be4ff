"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики обработки изображений).
- DIP: зависит от сервисов как от ролей; конкретные реализации инкапсулированы.
Clean Code:
- Обработчики компактны; вся обработка — в сервисах, ядро конвейера — чистые функции.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from tkinter import filedialog, TclError
from typing import Optional

import customtkinter as ctk

from image_ascii.models.ascii_model import AsciiArt, AsciiConfig
from image_ascii.models.errors import AsciiConversionError
from image_ascii.models.image_model import ImageData
from image_ascii.services.export_service import ExportService
from image_ascii.services.image_service import ImageService
from image_ascii.services.process_service import ProcessService
from image_ascii.ui.ascii_view import AsciiView
from image_ascii.ui.bottom_bar import BottomBar
from image_ascii.ui.image_viewer import ImageViewer
from image_ascii.ui.sidebar import Sidebar

logger = logging.getLogger(__name__)

IMAGE_FILETYPES = (
    ("Images", "*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp"),
    ("All files", "*.*"),
)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Загрузка изображений через `ImageService`.
    - Пересчёт ASCII-арта через `ProcessService` при любом изменении параметров.
    - Копирование и сохранение результата.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    ascii_view: AsciiView
    bottom: BottomBar
    window: ctk.CTk

    _image_service: ImageService = field(default_factory=ImageService)
    _process_service: Optional[ProcessService] = None
    _export_service: ExportService = field(default_factory=ExportService)
    _base_config: AsciiConfig = field(default_factory=AsciiConfig)
    _current_image: Optional[ImageData] = None
    _current_art: Optional[AsciiArt] = None

    def __post_init__(self) -> None:
        if self._process_service is None:
            self._process_service = ProcessService(self._image_service)

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_settings_change = self._handle_settings_change
        self.sidebar.on_preview_change = self._handle_preview_change
        self.sidebar.on_copy = self._handle_copy
        self.sidebar.on_save = self._handle_save

        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed
        self.bottom.on_font_size_change = self._handle_font_size_change

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(title="Выберите изображение", filetypes=IMAGE_FILETYPES)
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return
        self.open_image(file_path)

    def _handle_settings_change(self) -> None:
        self._convert()

    def _handle_preview_change(self, _mode: str) -> None:
        self._apply_preview()

    def _handle_copy(self) -> None:
        if self._current_art is None:
            return
        self.window.clipboard_clear()
        self.window.clipboard_append(self._current_art.text)
        self.bottom.set_status("Текст скопирован в буфер обмена")

    def _handle_save(self) -> None:
        if self._current_art is None:
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить ASCII-арт",
                defaultextension=".txt",
                filetypes=(("Text", "*.txt"), ("All files", "*.*")),
            )
        except TclError:
            return
        if not file_path:
            return
        try:
            saved = self._export_service.save_text(self._current_art, file_path)
        except OSError as exc:
            logger.warning("Save failed: %s", exc)
            self.bottom.set_status(f"Не удалось сохранить: {exc}", error=True)
            return
        self.bottom.set_status(f"Сохранено: {saved}")

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_font_size_change(self, size: int) -> None:
        self.ascii_view.set_font_size(size)

    # ---- Public API ----
    def open_image(self, file_path: str) -> None:
        """Загружает изображение и сразу пересчитывает результат."""
        try:
            image_data = self._image_service.load_image(file_path)
        except (OSError, ValueError) as exc:
            logger.warning("Cannot open %s: %s", file_path, exc)
            self.bottom.set_status(str(exc), error=True)
            return

        self._current_image = image_data
        self.viewer.set_image(image_data.pil_image)
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
        self.sidebar.set_image_info(image_data)
        self._convert()

    def current_config(self) -> AsciiConfig:
        width, edges, sensitivity = self.sidebar.get_conversion_params()
        # char_aspect в UI не настраивается и берётся из базовой конфигурации
        return self._base_config.with_changes(
            target_width=width, enable_edge_detection=edges, edge_sensitivity=sensitivity
        )

    # ---- Helpers ----
    def _convert(self) -> None:
        """Пересчитывает ASCII-арт для текущего изображения и параметров UI."""
        if self._current_image is None:
            return
        try:
            config = self.current_config()
            art = self._process_service.image_to_ascii(self._current_image.pil_image, config)
        except AsciiConversionError as exc:
            logger.warning("Conversion failed: %s", exc)
            self.bottom.set_status(str(exc), error=True)
            return

        self._current_art = art
        self.ascii_view.set_text(art.text)
        mode = "границы" if config.enable_edge_detection else "заливка"
        self.bottom.set_status(f"{art.width} × {art.height} символов, {mode}")
        self._apply_preview()

    def _apply_preview(self) -> None:
        """Накладывает выбранное превью в разрешении сетки на исходник."""
        if self._current_image is None:
            return
        mode = self.sidebar.get_preview_mode()
        src = self._current_image.pil_image
        processed = None
        try:
            if mode == "Яркость":
                processed = self._process_service.luminance_preview(src, self.current_config())
            elif mode == "Границы":
                processed = self._process_service.edge_preview(src, self.current_config())
        except AsciiConversionError as exc:
            logger.warning("Preview failed: %s", exc)
            self.bottom.set_status(str(exc), error=True)
        self.viewer.set_processed_image(processed)
