"""Целевые размеры и связь ширины с высотой при зафиксированных пропорциях.

Переходы состояния — чистые функции над неизменяемой `GeometryState`:
`on_width_changed`, `on_height_changed`, `with_aspect_lock`.
Граница ввода — `parse_dimension`: всё, что до неё не дошло, уже валидно.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Union

from image_editor import config
from image_editor.errors import InvalidDimension


@dataclass(frozen=True)
class GeometryState:
    """Размер холста результата.

    Fields:
        target_width: Ширина результата, px (>= 1).
        target_height: Высота результата, px (>= 1).
        aspect_lock: Сохранять пропорции при изменении одной из сторон.
        natural_aspect_ratio: width / height исходного изображения, фиксируется при загрузке.
    """
    target_width: int = config.DEFAULT_WIDTH
    target_height: int = config.DEFAULT_HEIGHT
    aspect_lock: bool = config.DEFAULT_ASPECT_LOCK
    natural_aspect_ratio: float = config.DEFAULT_WIDTH / config.DEFAULT_HEIGHT

    @classmethod
    def from_image(cls, width: int, height: int, aspect_lock: bool = config.DEFAULT_ASPECT_LOCK) -> "GeometryState":
        """Начальное состояние для только что загруженного изображения."""
        return cls(
            target_width=width,
            target_height=height,
            aspect_lock=aspect_lock,
            natural_aspect_ratio=width / height,
        )

    @property
    def size(self) -> tuple[int, int]:
        return self.target_width, self.target_height


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; 2.5 must become 3 here
    return max(1, int(math.floor(value + 0.5)))


def _coupled_dimension(value: float) -> int:
    """Пересчитанная сторона; тоже не может превышать MAX_DIMENSION."""
    pixels = _round_half_up(value)
    if pixels > config.MAX_DIMENSION:
        raise InvalidDimension(
            f"При сохранении пропорций вторая сторона превысит {config.MAX_DIMENSION}px: {pixels}"
        )
    return pixels


def on_width_changed(state: GeometryState, new_width: int) -> GeometryState:
    """Устанавливает ширину; при фиксированных пропорциях пересчитывает высоту.

    Raises:
        InvalidDimension: если пересчитанная высота больше MAX_DIMENSION.
    """
    if not state.aspect_lock:
        return replace(state, target_width=new_width)
    return replace(
        state,
        target_width=new_width,
        target_height=_coupled_dimension(new_width / state.natural_aspect_ratio),
    )


def on_height_changed(state: GeometryState, new_height: int) -> GeometryState:
    """Устанавливает высоту; при фиксированных пропорциях пересчитывает ширину.

    Raises:
        InvalidDimension: если пересчитанная ширина больше MAX_DIMENSION.
    """
    if not state.aspect_lock:
        return replace(state, target_height=new_height)
    return replace(
        state,
        target_height=new_height,
        target_width=_coupled_dimension(new_height * state.natural_aspect_ratio),
    )


def with_aspect_lock(state: GeometryState, locked: bool) -> GeometryState:
    """Переключает фиксацию пропорций без изменения текущих размеров."""
    return replace(state, aspect_lock=bool(locked))


def parse_dimension(raw: Union[str, int, float]) -> int:
    """Проверяет пользовательский ввод ширины/высоты.

    Args:
        raw: Строка из поля ввода или число.

    Returns:
        Целое число пикселей в диапазоне [1, MAX_DIMENSION].

    Raises:
        InvalidDimension: если значение не число, не целое, меньше 1 или больше MAX_DIMENSION.
    """
    if isinstance(raw, bool):
        raise InvalidDimension(f"Некорректный размер: {raw!r}")
    try:
        value = float(str(raw).strip())
    except ValueError as exc:
        raise InvalidDimension(f"Размер должен быть числом: {raw!r}") from exc
    if not math.isfinite(value) or value != int(value):
        raise InvalidDimension(f"Размер должен быть целым числом: {raw!r}")
    pixels = int(value)
    if pixels < 1:
        raise InvalidDimension(f"Размер должен быть положительным: {pixels}")
    if pixels > config.MAX_DIMENSION:
        raise InvalidDimension(f"Размер не может превышать {config.MAX_DIMENSION}px: {pixels}")
    return pixels
