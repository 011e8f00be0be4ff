"""Единая настройка логирования для точек входа (GUI и CLI).

Usage:
    from image_ascii.logging_config import setup_logging

    setup_logging()                      # stderr, INFO
    setup_logging(debug=True)            # stderr, DEBUG
    setup_logging(log_file="ascii.log")  # stderr + файл с ротацией
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

MAX_BYTES = 1024 * 1024  # 1 MB
BACKUP_COUNT = 2


def setup_logging(
    level: int = logging.INFO,
    log_file: str | Path | None = None,
    fmt: str = DEFAULT_FORMAT,
    *,
    debug: bool = False,
) -> None:
    """Настраивает корневой логгер. Вызывать один раз при старте."""
    if debug:
        level = logging.DEBUG

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(log_file, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT))
    logging.basicConfig(level=level, format=fmt, handlers=handlers, force=True)

    # Pillow пишет служебные сообщения о плагинах на DEBUG
    logging.getLogger("PIL").setLevel(max(level, logging.INFO))
