"""Загрузка изображений с диска и упаковка метаданных.

Принципы:
- SRP: класс отвечает только за декодирование и извлечение базовых свойств.
- Ядро редактора получает только `SourceImage`; байты файла и формат дальше не идут.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from image_editor.errors import DecodeFailure
from image_editor.models.image_model import SourceImage
from image_editor.utils.logging import logger


class ImageService:
    def load_image(self, file_path: str | Path) -> SourceImage:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `SourceImage` c `PIL.Image.Image` (в режиме RGBA), размерами, режимом и размером файла.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            DecodeFailure: если файл не распознан как изображение или повреждён,
                либо число пикселей превышает `Image.MAX_IMAGE_PIXELS`.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        try:
            with Image.open(path) as opened:
                original_mode = opened.mode
                # convert() forces a full decode, truncated files fail here
                pil_image = opened.convert("RGBA")
        except UnidentifiedImageError as exc:
            raise DecodeFailure(f"Файл не является изображением: {path}") from exc
        except Image.DecompressionBombError as exc:
            # not an OSError subclass
            raise DecodeFailure(f"Изображение слишком велико для декодирования: {path}") from exc
        except OSError as exc:
            raise DecodeFailure(f"Не удалось декодировать изображение: {path}") from exc

        width, height = pil_image.size
        if width < 1 or height < 1:
            raise DecodeFailure(f"Изображение не содержит пикселей: {path}")

        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.info("Loaded %s (%dx%d, %s)", path, width, height, original_mode)
        return SourceImage(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=original_mode,
            size_bytes=size_bytes,
        )
