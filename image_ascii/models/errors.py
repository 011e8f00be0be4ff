"""Ошибки конвейера преобразования изображения в ASCII.

Все исключения наследуются от `ValueError`: это ошибки входных данных,
которые вызывающая сторона (UI, CLI) может показать пользователю.
"""
from __future__ import annotations


class AsciiConversionError(ValueError):
    """Базовая ошибка конвейера."""


class InvalidDimensionsError(AsciiConversionError):
    """Ширина/высота < 1 или размер буфера не совпадает с width × height."""

    def __init__(self, width: int, height: int, detail: str = "") -> None:
        self.width = width
        self.height = height
        message = f"Недопустимые размеры: {width} × {height}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class MissingGradientDataError(AsciiConversionError):
    """Режим границ включён, но поля градиента не переданы."""

    def __init__(self) -> None:
        super().__init__("Режим границ требует magnitude и direction")


class InvalidSensitivityError(AsciiConversionError):
    """Порог чувствительности не является конечным числом."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Чувствительность должна быть конечным числом: {value!r}")
