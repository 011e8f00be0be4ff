"""Модели данных конвейера: пиксельный буфер, поле градиента, результат и настройки.

Принципы:
- SRP: только структуры данных и проверка их инвариантов.
- Неизменяемость (`frozen=True`): каждая конвертация создаёт свои объекты.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List

import numpy as np

from image_ascii.models.errors import InvalidDimensionsError, InvalidSensitivityError

DEFAULT_TARGET_WIDTH = 100
DEFAULT_EDGE_SENSITIVITY = 100.0
# Символ моноширинного шрифта примерно вдвое выше своей ширины
DEFAULT_CHAR_ASPECT = 0.55


@dataclass(frozen=True)
class PixelBuffer:
    """Плотный RGBA-буфер (uint8, построчно) с явными размерами.

    Fields:
        data: Массив uint8 из width * height * 4 значений (любой формы).
        width: Ширина, px (>= 1).
        height: Высота, px (>= 1).
    """
    data: np.ndarray
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise InvalidDimensionsError(self.width, self.height)
        expected = self.width * self.height * 4
        if self.data.size != expected:
            raise InvalidDimensionsError(
                self.width, self.height, f"ожидалось {expected} значений, получено {self.data.size}"
            )

    @classmethod
    def from_rgba_rows(cls, rows: List[List[tuple]]) -> "PixelBuffer":
        """Собирает буфер из списка строк с кортежами (R, G, B[, A])."""
        height = len(rows)
        width = len(rows[0]) if rows else 0
        flat: List[int] = []
        for row in rows:
            if len(row) != width:
                raise InvalidDimensionsError(width, height, "строки разной длины")
            for pixel in row:
                r, g, b = pixel[:3]
                a = pixel[3] if len(pixel) > 3 else 255
                flat.extend((r, g, b, a))
        return cls(data=np.asarray(flat, dtype=np.uint8), width=width, height=height)

    def as_array(self) -> np.ndarray:
        """Представление (height, width, 4) без копирования данных."""
        return self.data.reshape(self.height, self.width, 4)


@dataclass(frozen=True)
class GradientField:
    """Модуль и направление градиента (градусы, (-180, 180]) формы (height, width)."""
    magnitude: np.ndarray
    direction: np.ndarray


@dataclass(frozen=True)
class AsciiArt:
    """Результат: строки символов, каждая завершается переводом строки."""
    text: str
    width: int
    height: int

    @property
    def rows(self) -> List[str]:
        return self.text.splitlines()

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class AsciiConfig:
    """Параметры одной конвертации.

    Fields:
        target_width: Ширина результата в символах (задаёт ресемплинг).
        enable_edge_detection: Заменять заливку символами границ.
        edge_sensitivity: Порог модуля градиента; выше порог — меньше границ.
        char_aspect: Поправка высоты сетки на пропорции символа.
    """
    target_width: int = DEFAULT_TARGET_WIDTH
    enable_edge_detection: bool = False
    edge_sensitivity: float = DEFAULT_EDGE_SENSITIVITY
    char_aspect: float = DEFAULT_CHAR_ASPECT

    def __post_init__(self) -> None:
        if self.target_width < 1:
            raise InvalidDimensionsError(self.target_width, 0, "target_width должен быть >= 1")
        if not math.isfinite(self.edge_sensitivity):
            raise InvalidSensitivityError(self.edge_sensitivity)
        if not (math.isfinite(self.char_aspect) and self.char_aspect > 0):
            raise ValueError(f"char_aspect должен быть положительным: {self.char_aspect!r}")

    def with_changes(self, **changes: object) -> "AsciiConfig":
        """Копия настроек с изменёнными полями (проверки выполняются заново)."""
        return replace(self, **changes)
