"""Модель исходного изображения, загруженного с диска.

Декодирование выполняет `ImageService`; ядро конвейера работает уже с
`PixelBuffer` и об этой модели не знает.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class ImageData:
    """Загруженное изображение (RGBA) и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        pil_image: Изображение PIL в режиме RGBA.
        width: Ширина, px.
        height: Высота, px.
        mode: Режим исходного файла до конвертации, например "P" или "RGB".
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]
