"""Параметры цветовых фильтров.

Все значения — проценты. Четыре фильтра независимы и применяются вместе,
в порядке `FILTER_NAMES`.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Tuple

from image_editor import config

FILTER_NAMES: Tuple[str, ...] = ("brightness", "contrast", "grayscale", "sepia")

FILTER_RANGES: Dict[str, Tuple[int, int, int]] = {
    "brightness": config.BRIGHTNESS_RANGE,
    "contrast": config.CONTRAST_RANGE,
    "grayscale": config.GRAYSCALE_RANGE,
    "sepia": config.SEPIA_RANGE,
}


@dataclass(frozen=True)
class FilterState:
    """Интенсивности фильтров.

    Fields:
        brightness: Яркость, 0–200 %, 100 — без изменений.
        contrast: Контрастность, 0–200 %, 100 — без изменений.
        grayscale: Обесцвечивание, 0–100 %, 0 — без изменений.
        sepia: Сепия, 0–100 %, 0 — без изменений.
    """
    brightness: float = config.BRIGHTNESS_RANGE[2]
    contrast: float = config.CONTRAST_RANGE[2]
    grayscale: float = config.GRAYSCALE_RANGE[2]
    sepia: float = config.SEPIA_RANGE[2]

    def __post_init__(self) -> None:
        for name in FILTER_NAMES:
            low, high, _identity = FILTER_RANGES[name]
            value = getattr(self, name)
            if not low <= value <= high:
                raise ValueError(f"{name}={value} вне диапазона [{low}, {high}]")

    @property
    def is_identity(self) -> bool:
        """True, если ни один фильтр не меняет пиксели."""
        return all(getattr(self, name) == FILTER_RANGES[name][2] for name in FILTER_NAMES)

    def with_value(self, name: str, value: float) -> "FilterState":
        """Возвращает копию с новым значением фильтра, приведённым к его диапазону.

        Raises:
            KeyError: если `name` не является именем фильтра.
        """
        low, high, _identity = FILTER_RANGES[name]
        return replace(self, **{name: max(low, min(high, value))})

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in FILTER_NAMES}
