"""Сохранение результата в текстовый файл."""
from __future__ import annotations

import logging
from pathlib import Path

from image_ascii.models.ascii_model import AsciiArt

logger = logging.getLogger(__name__)


class ExportService:
    def save_text(self, art: AsciiArt, file_path: str | Path) -> Path:
        """Записывает `art.text` в UTF-8 и возвращает абсолютный путь файла.

        Raises:
            OSError: если файл не удалось записать.
        """
        path = Path(file_path).expanduser().resolve()
        # newline="" — не превращать "\n" в "\r\n" на Windows
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(art.text)
        logger.info("Saved %dx%d art to %s", art.width, art.height, path)
        return path
