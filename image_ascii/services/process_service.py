from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from PIL import Image

from image_ascii.models.ascii_model import AsciiArt, AsciiConfig, PixelBuffer
from image_ascii.services import ascii_pipeline
from image_ascii.services.image_service import ImageService

logger = logging.getLogger(__name__)


class ProcessService:
    def __init__(self, image_service: Optional[ImageService] = None) -> None:
        self._image_service = image_service or ImageService()

    def image_to_ascii(self, image: Image.Image, config: AsciiConfig) -> AsciiArt:
        """
        Преобразует изображение PIL в ASCII-арт по настройкам `config`.
        Ресемплинг до config.target_width выполняется до запуска конвейера.
        """
        pixels = self._resample(image, config)
        art = ascii_pipeline.convert_pixels(
            pixels,
            edge_enabled=config.enable_edge_detection,
            sensitivity=config.edge_sensitivity,
        )
        logger.debug("image_to_ascii: %dx%d chars", art.width, art.height)
        return art

    # ---------- Превью для просмотрщика ----------
    def luminance_preview(self, image: Image.Image, config: AsciiConfig) -> Image.Image:
        """
        Яркость (R+G+B)/3 в разрешении сетки символов, 8-бит (L).
        Именно это значение квантуется в символы палитры.
        """
        pixels = self._resample(image, config)
        gray = ascii_pipeline.extract_luminance(pixels)
        out = np.clip(np.rint(gray), 0, 255).astype(np.uint8)
        return Image.fromarray(out)

    def edge_preview(self, image: Image.Image, config: AsciiConfig) -> Image.Image:
        """
        Маска границ в разрешении сетки: 255 там, где модуль градиента
        больше config.edge_sensitivity (там появятся символы - \\ | /).
        """
        pixels = self._resample(image, config)
        gray = ascii_pipeline.extract_luminance(pixels)
        gradient = ascii_pipeline.compute_gradient(gray, pixels.width, pixels.height)
        return self._apply_binary_mask(gradient.magnitude > config.edge_sensitivity)

    # ---------- Вспомогательные функции ----------
    def _resample(self, image: Image.Image, config: AsciiConfig) -> PixelBuffer:
        return self._image_service.to_pixel_buffer(image, config.target_width, config.char_aspect)

    def _apply_binary_mask(self, mask_bool: np.ndarray) -> Image.Image:
        """
        Преобразует булеву маску в 8-битное бинарное изображение (0/255).
        """
        out = np.where(mask_bool, 255, 0).astype(np.uint8)
        return Image.fromarray(out)
