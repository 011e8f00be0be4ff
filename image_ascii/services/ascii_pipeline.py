"""Ядро: пиксельный буфер -> яркость -> градиент Собеля -> символы -> текст.

Все функции чистые: принимают готовые массивы, возвращают новые и ничего
не мутируют. Поля скаляров хранятся как float64 формы (height, width).

Соглашение о направлении (следует из ядер ниже, применяются как корреляция):
яркость растёт слева направо -> gx > 0, направление 0°;
яркость растёт сверху вниз -> gy > 0, направление +90°.
"""
from __future__ import annotations

import bisect
import logging
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from image_ascii.models.ascii_model import (
    DEFAULT_EDGE_SENSITIVITY,
    AsciiArt,
    GradientField,
    PixelBuffer,
)
from image_ascii.models.errors import (
    InvalidDimensionsError,
    InvalidSensitivityError,
    MissingGradientDataError,
)

logger = logging.getLogger(__name__)


def _frozen(values: object, dtype: object) -> np.ndarray:
    arr = np.array(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


# От самого «пустого» к самому «плотному»
PALETTE = " .:-=+*%@#"
_PALETTE_GLYPHS = _frozen(list(PALETTE), "<U1")

SOBEL_X = _frozen([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], np.float64)
SOBEL_Y = _frozen([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], np.float64)

# Левые (включительные) границы секторов по 45°; справа от 157.5 и слева
# от -157.5 лежит общий горизонтальный сектор с переходом через ±180.
SECTOR_BOUNDS: Tuple[float, ...] = (-157.5, -112.5, -67.5, -22.5, 22.5, 67.5, 112.5, 157.5)
# EDGE_GLYPHS[i] — символ для угла, у которого ровно i границ <= угла
EDGE_GLYPHS = "-\\|/-\\|/-"
_EDGE_GLYPHS = _frozen(list(EDGE_GLYPHS), "<U1")
_SECTOR_BOUNDS = _frozen(SECTOR_BOUNDS, np.float64)


# ---------- Вспомогательные функции ----------
def _check_dimensions(width: int, height: int) -> None:
    if width < 1 or height < 1:
        raise InvalidDimensionsError(width, height)


def _shape_dims(arr: np.ndarray) -> Tuple[int, int]:
    """(width, height) для сообщений об ошибках."""
    if arr.ndim == 0 or arr.size == 0:
        return 0, 0
    width = arr.shape[-1]
    return width, arr.size // width


def _as_field(values: object) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


def _validate_sensitivity(sensitivity: object) -> float:
    try:
        value = float(sensitivity)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise InvalidSensitivityError(sensitivity) from exc
    if not math.isfinite(value):
        raise InvalidSensitivityError(sensitivity)
    return value


# ---------- 1) Яркость ----------
def extract_luminance(pixels: PixelBuffer) -> np.ndarray:
    """Невзвешенное среднее R, G, B для каждого пикселя; альфа игнорируется.

    Returns:
        float64-массив (height, width) в диапазоне [0, 255].
    """
    rgb = pixels.as_array()[..., :3].astype(np.float64)
    return rgb.sum(axis=2) / 3.0


# ---------- 2) Градиент Собеля ----------
def compute_gradient(gray: object, width: int, height: int) -> GradientField:
    """Свёртка поля яркости ядрами Собеля с повтором краевых пикселей.

    Соседи за границей изображения берутся с ближайшего края (clamp-to-edge),
    без заворачивания и без нулевого заполнения.

    Args:
        gray: Поле яркости из width * height значений (плоское или 2D).
        width: Ширина, >= 1.
        height: Высота, >= 1.

    Returns:
        `GradientField`: модуль sqrt(gx² + gy²) без ограничения сверху и
        направление atan2(gy, gx) в градусах, диапазон (-180, 180].
        Для gx = gy = 0 направление равно 0.

    Raises:
        InvalidDimensionsError: width/height < 1 или размер поля не width * height.
    """
    _check_dimensions(width, height)
    arr = _as_field(gray)
    if arr.size != width * height:
        raise InvalidDimensionsError(width, height, f"поле яркости из {arr.size} значений")
    arr = arr.reshape(height, width)

    # Паддинг повтором края: p[y + 1, x + 1] == arr[y, x]
    p = np.pad(arr, ((1, 1), (1, 1)), mode="edge")

    gx = np.zeros_like(arr)
    gy = np.zeros_like(arr)
    for ky in range(3):
        for kx in range(3):
            window = p[ky:ky + height, kx:kx + width]
            wx = SOBEL_X[ky, kx]
            wy = SOBEL_Y[ky, kx]
            if wx:
                gx += wx * window
            if wy:
                gy += wy * window

    return GradientField(magnitude=np.hypot(gx, gy), direction=gradient_direction(gx, gy))


def gradient_direction(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    """Направление atan2(gy, gx) в градусах, диапазон (-180, 180].

    arctan2 даёт -180 при gy == -0.0 и gx < 0; такой угол переводится в 180.
    """
    direction = np.degrees(np.arctan2(gy, gx))
    return np.where(direction == -180.0, 180.0, direction)


# ---------- 3) Символы ----------
def intensity_to_glyph(gray: float) -> str:
    """Символ палитры для одного значения яркости."""
    last = len(PALETTE) - 1
    index = math.floor((gray / 255.0) * last)
    return PALETTE[max(0, min(last, index))]


def direction_to_glyph(angle: float) -> str:
    """Символ границы для направления градиента в градусах.

    Сектора полуоткрытые [a, b); горизонтальный сектор
    [157.5, 180] ∪ [-180, -157.5) покрывает переход через ±180.
    """
    return EDGE_GLYPHS[bisect.bisect_right(SECTOR_BOUNDS, angle)]


def _shading_glyphs(gray: np.ndarray) -> np.ndarray:
    last = len(PALETTE) - 1
    indices = np.floor((gray / 255.0) * last).astype(np.intp)
    indices = np.clip(indices, 0, last)
    return _PALETTE_GLYPHS[indices]


def _edge_glyphs(direction: np.ndarray) -> np.ndarray:
    # searchsorted(side="right") == число границ <= угла, как bisect_right
    return _EDGE_GLYPHS[np.searchsorted(_SECTOR_BOUNDS, direction, side="right")]


def map_to_glyphs(
    gray: object,
    magnitude: Optional[object] = None,
    direction: Optional[object] = None,
    edge_enabled: bool = False,
    sensitivity: float = DEFAULT_EDGE_SENSITIVITY,
) -> np.ndarray:
    """Выбирает по одному символу на пиксель.

    Пиксель получает символ границы, если режим границ включён и
    magnitude > sensitivity; иначе символ палитры по яркости
    floor(gray / 255 * 9), ограниченный диапазоном палитры.

    Returns:
        Массив односимвольных строк той же формы, что и `gray`.

    Raises:
        InvalidSensitivityError: sensitivity не конечное число.
        MissingGradientDataError: режим границ без magnitude/direction.
        InvalidDimensionsError: число значений в полях градиента и яркости различается.
    """
    threshold = _validate_sensitivity(sensitivity)
    gray_arr = _as_field(gray)
    shading = _shading_glyphs(gray_arr)
    if not edge_enabled:
        return shading

    if magnitude is None or direction is None:
        raise MissingGradientDataError()
    mag = _as_field(magnitude)
    angle = _as_field(direction)
    for field in (mag, angle):
        if field.size != gray_arr.size:
            width, height = _shape_dims(gray_arr)
            raise InvalidDimensionsError(
                width, height, f"поле градиента из {field.size} значений, яркости из {gray_arr.size}"
            )
    # compute_gradient всегда отдаёт (height, width); плоская яркость тоже допустима
    mag = mag.reshape(gray_arr.shape)
    angle = angle.reshape(gray_arr.shape)

    return np.where(mag > threshold, _edge_glyphs(angle), shading)


# ---------- 4) Сборка сетки ----------
def assemble_grid(glyphs: Sequence[str] | np.ndarray, width: int, height: int) -> str:
    """Склеивает символы построчно; после каждой строки (включая последнюю) — "\\n"."""
    _check_dimensions(width, height)
    arr = np.asarray(glyphs)
    if arr.size != width * height:
        raise InvalidDimensionsError(width, height, f"получено {arr.size} символов")
    grid = arr.reshape(height, width)
    return "".join("".join(row) + "\n" for row in grid)


def convert_pixels(
    pixels: PixelBuffer,
    edge_enabled: bool = False,
    sensitivity: float = DEFAULT_EDGE_SENSITIVITY,
) -> AsciiArt:
    """Полный проход конвейера по уже ресемплированному буферу."""
    width, height = pixels.width, pixels.height
    gray = extract_luminance(pixels)
    magnitude = direction = None
    if edge_enabled:
        gradient = compute_gradient(gray, width, height)
        magnitude, direction = gradient.magnitude, gradient.direction
    glyphs = map_to_glyphs(gray, magnitude, direction, edge_enabled, sensitivity)
    text = assemble_grid(glyphs, width, height)
    logger.debug(
        "Converted %dx%d buffer (edges=%s, sensitivity=%s)", width, height, edge_enabled, sensitivity
    )
    return AsciiArt(text=text, width=width, height=height)
