"""Загрузка изображений с диска и ресемплинг в сетку символов.

Принципы:
- SRP: декодирование и изменение размера; никакой логики символов.
- Результат ресемплинга — `PixelBuffer`, который ядро только читает.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from image_ascii.models.ascii_model import DEFAULT_CHAR_ASPECT, PixelBuffer
from image_ascii.models.errors import InvalidDimensionsError
from image_ascii.models.image_model import ImageData

logger = logging.getLogger(__name__)


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, исходным режимом и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            ValueError: если файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as source:
                source_mode = source.mode
                pil_image = source.convert("RGBA")
        except UnidentifiedImageError as exc:
            raise ValueError(f"Файл не является изображением: {path}") from exc

        width, height = pil_image.size
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.info("Loaded %s (%dx%d, %s)", path, width, height, source_mode)
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=source_mode,
            size_bytes=size_bytes,
        )

    @staticmethod
    def grid_size(
        width: int, height: int, target_width: int, char_aspect: float = DEFAULT_CHAR_ASPECT
    ) -> Tuple[int, int]:
        """Размер сетки символов: round(target_width * h / w * char_aspect), минимум 1 строка."""
        if width < 1 or height < 1:
            raise InvalidDimensionsError(width, height)
        if target_width < 1:
            raise InvalidDimensionsError(target_width, 0, "target_width должен быть >= 1")
        target_height = round(target_width * (height / width) * char_aspect)
        return target_width, max(1, target_height)

    def to_pixel_buffer(
        self,
        image: Image.Image,
        target_width: int,
        char_aspect: float = DEFAULT_CHAR_ASPECT,
    ) -> PixelBuffer:
        """Масштабирует изображение до сетки символов и упаковывает в RGBA-буфер."""
        width, height = self.grid_size(image.width, image.height, target_width, char_aspect)
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        resized = rgba.resize((width, height), Image.Resampling.LANCZOS)
        data = np.asarray(resized, dtype=np.uint8).reshape(-1)
        logger.debug("Resampled %dx%d -> %dx%d", image.width, image.height, width, height)
        return PixelBuffer(data=data, width=width, height=height)
