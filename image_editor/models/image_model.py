"""Модель исходного изображения.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`); новая загрузка заменяет объект целиком.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class SourceImage:
    """Декодированное исходное изображение и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        pil_image: Декодированное изображение PIL в режиме RGBA.
        width: Натуральная ширина, px.
        height: Натуральная высота, px.
        mode: Режим PIL файла до приведения к RGBA, например "P" или "RGB".
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]

    @property
    def natural_aspect_ratio(self) -> float:
        """Отношение ширины к высоте исходного изображения."""
        return self.width / self.height
