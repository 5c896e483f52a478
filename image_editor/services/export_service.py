"""Экспорт результата в PNG.

Буфер сохраняется как есть: без повторной фильтрации, масштабирования и
сжатия с потерями.
"""
from __future__ import annotations

import io
from pathlib import Path

from PIL import Image

from image_editor import config
from image_editor.utils.logging import logger


class ExportService:
    def suggest_filename(self) -> str:
        return config.EXPORT_FILENAME

    def to_png_bytes(self, image: Image.Image) -> bytes:
        """Кодирует изображение в PNG и возвращает байты файла."""
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    def save_png(self, image: Image.Image, file_path: str | Path) -> Path:
        """Сохраняет изображение в PNG.

        Если у пути нет расширения `.png`, оно добавляется.

        Returns:
            Фактический путь сохранённого файла.
        """
        path = Path(file_path)
        if path.suffix.lower() != ".png":
            path = path.with_name(path.name + ".png")
        image.save(path, format="PNG")
        logger.info("Exported %dx%d image to %s", image.width, image.height, path)
        return path
