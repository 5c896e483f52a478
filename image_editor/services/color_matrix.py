"""Цветовые матрицы фильтров.

Каждый фильтр — аффинное преобразование RGB в пространстве 0..255,
записанное однородной матрицей 4x4. Цепочка яркость → контраст →
обесцвечивание → сепия сворачивается в одну матрицу и применяется
к изображению один раз.
"""
from __future__ import annotations

import numpy as np
from PIL import Image

from image_editor.models.filter_model import FilterState

# Rec. 709 luma
_LUMA = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)

_SEPIA = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float64,
)


def _affine(linear: np.ndarray, offset: float = 0.0) -> np.ndarray:
    m = np.eye(4, dtype=np.float64)
    m[:3, :3] = linear
    m[:3, 3] = offset
    return m


def _mix_with_identity(target: np.ndarray, amount: float) -> np.ndarray:
    """(1 - amount) * I + amount * target; при amount == 0 даёт точную единичную матрицу."""
    return (1.0 - amount) * np.eye(3, dtype=np.float64) + amount * target


def brightness_matrix(percent: float) -> np.ndarray:
    """Линейное масштабирование каналов на percent / 100."""
    return _affine(np.eye(3, dtype=np.float64) * (percent / 100.0))


def contrast_matrix(percent: float) -> np.ndarray:
    """Масштабирование относительно среднего серого: c·v + (0.5 − 0.5·c)·255."""
    c = percent / 100.0
    return _affine(np.eye(3, dtype=np.float64) * c, (0.5 - 0.5 * c) * 255.0)


def grayscale_matrix(percent: float) -> np.ndarray:
    """Интерполяция между пикселем и его яркостью по Rec. 709."""
    luma = np.tile(_LUMA, (3, 1))
    return _affine(_mix_with_identity(luma, percent / 100.0))


def sepia_matrix(percent: float) -> np.ndarray:
    """Интерполяция между пикселем и его тонированной в сепию версией."""
    return _affine(_mix_with_identity(_SEPIA, percent / 100.0))


def combined_matrix(filters: FilterState) -> np.ndarray:
    """Одна матрица для всей цепочки фильтров (первым применяется brightness)."""
    return (
        sepia_matrix(filters.sepia)
        @ grayscale_matrix(filters.grayscale)
        @ contrast_matrix(filters.contrast)
        @ brightness_matrix(filters.brightness)
    )


def apply_color_matrix(image: Image.Image, matrix: np.ndarray) -> Image.Image:
    """Применяет матрицу 4x4 к RGB-каналам, альфа-канал сохраняется.

    Результат округляется до ближайшего целого и обрезается до [0, 255].
    Возвращает новое изображение в режиме RGBA; исходное не изменяется.
    """
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    arr = np.asarray(rgba, dtype=np.float64)
    r, g, b = arr[..., 0], arr[..., 1], arr[..., 2]
    out = np.empty(arr.shape, dtype=np.uint8)
    # per-channel sums, so identical matrix rows give identical channels
    for i in range(3):
        channel = r * matrix[i, 0] + g * matrix[i, 1] + b * matrix[i, 2] + matrix[i, 3]
        out[..., i] = np.clip(np.rint(channel), 0, 255).astype(np.uint8)
    out[..., 3] = arr[..., 3].astype(np.uint8)
    return Image.fromarray(out)
