"""Параметры текстовой подписи поверх изображения."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Any, Tuple

from image_editor import config

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def _finite_int(value: Any) -> int:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"Ожидалось конечное число: {value!r}")
    return int(round(number))


def normalize_hex_color(value: str) -> str:
    """Приводит цвет к виду `#RRGGBB` (верхний регистр).

    Принимает `#RGB`, `#RRGGBB`, с решёткой или без.

    Raises:
        ValueError: если строка не является HEX-цветом.
    """
    match = _HEX_COLOR.match(value.strip())
    if match is None:
        raise ValueError(f"Некорректный цвет: {value!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits.upper()}"


@dataclass(frozen=True)
class TextOverlayState:
    """Подпись: текст, шрифт, цвет и позиция левого верхнего угла.

    Fields:
        text: Текст подписи, может быть пустым.
        font_size: Размер шрифта, px.
        color: Цвет заливки `#RRGGBB`.
        x: Координата X левого верхнего угла в пикселях результата.
        y: Координата Y левого верхнего угла в пикселях результата.
        visible: Показывать ли подпись.

    Координаты не ограничиваются холстом: текст может выходить за край.
    """
    text: str = config.DEFAULT_TEXT
    font_size: int = config.DEFAULT_FONT_SIZE
    color: str = config.DEFAULT_TEXT_COLOR
    x: int = config.DEFAULT_TEXT_POSITION[0]
    y: int = config.DEFAULT_TEXT_POSITION[1]
    visible: bool = False

    @property
    def is_drawable(self) -> bool:
        """Подпись влияет на результат только если она включена и не пуста."""
        return self.visible and bool(self.text)

    @property
    def rgb(self) -> Tuple[int, int, int]:
        digits = normalize_hex_color(self.color)[1:]
        return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)

    def with_changes(self, **changes: Any) -> "TextOverlayState":
        """Возвращает копию с применёнными изменениями.

        Размер шрифта приводится к FONT_SIZE_RANGE, цвет нормализуется,
        координаты округляются до целых.

        Raises:
            ValueError: при некорректном цвете, нечисловых или бесконечных
                координатах и размере.
        """
        if "font_size" in changes:
            low, high = config.FONT_SIZE_RANGE
            changes["font_size"] = max(low, min(high, _finite_int(changes["font_size"])))
        if "color" in changes:
            changes["color"] = normalize_hex_color(str(changes["color"]))
        for axis in ("x", "y"):
            if axis in changes:
                changes[axis] = _finite_int(changes[axis])
        if "text" in changes:
            changes["text"] = str(changes["text"])
        if "visible" in changes:
            changes["visible"] = bool(changes["visible"])
        return replace(self, **changes)
