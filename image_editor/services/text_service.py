"""Отрисовка текстовой подписи.

Шрифт ищется по списку `config.FONT_CANDIDATES`; если ни один не найден,
используется встроенный масштабируемый шрифт Pillow.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Tuple, Union

from PIL import Image, ImageDraw, ImageFont

from image_editor import config
from image_editor.models.text_overlay_model import TextOverlayState
from image_editor.utils.logging import logger

FontType = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# left / ascender: the top of the text line sits at (x, y)
TEXT_ANCHOR = "la"


@lru_cache(maxsize=32)
def load_font(size: int) -> FontType:
    """Возвращает шрифт заданного размера (с кэшированием)."""
    for candidate in config.FONT_CANDIDATES:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.debug("No TrueType font from FONT_CANDIDATES found, using Pillow default at %dpx", size)
    return ImageFont.load_default(size=size)


class TextService:
    def draw_overlay(self, image: Image.Image, overlay: TextOverlayState) -> Image.Image:
        """Рисует подпись на `image` на месте и возвращает его же.

        Ничего не делает, если подпись выключена или пуста. Текст, выходящий
        за пределы холста, просто обрезается при растеризации.
        """
        if not overlay.is_drawable:
            return image
        draw = ImageDraw.Draw(image)
        draw.text(
            (overlay.x, overlay.y),
            overlay.text,
            fill=overlay.rgb + (255,),
            font=load_font(overlay.font_size),
            anchor=TEXT_ANCHOR,
        )
        return image

    def text_bbox(self, overlay: TextOverlayState) -> Tuple[int, int, int, int]:
        """Ограничивающий прямоугольник подписи в координатах результата (left, top, right, bottom)."""
        probe = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
        left, top, right, bottom = probe.textbbox(
            (overlay.x, overlay.y),
            overlay.text,
            font=load_font(overlay.font_size),
            anchor=TEXT_ANCHOR,
        )
        return int(left), int(top), int(right), int(bottom)
