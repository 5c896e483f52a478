"""Компоновка результата: масштабирование, фильтры, подпись.

Принципы:
- SRP: чистая функция от четырёх состояний, без UI и ввода-вывода.
- Порядок шагов фиксирован: фильтры применяются до подписи, поэтому текст
  никогда не попадает под фильтры.
"""
from __future__ import annotations

from typing import Optional

from PIL import Image

from image_editor import config
from image_editor.models.filter_model import FilterState
from image_editor.models.geometry_model import GeometryState
from image_editor.models.image_model import SourceImage
from image_editor.models.text_overlay_model import TextOverlayState
from image_editor.services.color_matrix import apply_color_matrix, combined_matrix
from image_editor.services.text_service import TextService
from image_editor.utils.logging import logger


class ProcessService:
    def __init__(self, text_service: Optional[TextService] = None) -> None:
        self._text_service = text_service or TextService()

    def scale_to_target(self, source: SourceImage, geometry: GeometryState) -> Image.Image:
        """Растягивает исходник ровно до целевого размера (пропорции могут нарушаться).

        При совпадении размеров возвращается точная копия.
        """
        image = source.pil_image
        if image.size == geometry.size:
            return image.copy()
        return image.resize(geometry.size, config.RESAMPLE)

    def apply_filters(self, image: Image.Image, filters: FilterState) -> Image.Image:
        """Применяет цепочку фильтров одной матрицей; при нейтральных значениях ничего не меняет."""
        if filters.is_identity:
            return image
        return apply_color_matrix(image, combined_matrix(filters))

    def compose(
        self,
        source: SourceImage,
        geometry: GeometryState,
        filters: FilterState,
        overlay: TextOverlayState,
    ) -> Image.Image:
        """Собирает итоговое изображение.

        Шаги:
        1) холст целевого размера с растянутым исходником;
        2) фильтры (brightness → contrast → grayscale → sepia);
        3) подпись поверх, если она включена и не пуста.

        Args:
            source: Загруженное изображение (вызывающий гарантирует, что оно есть).
            geometry: Целевые размеры, обе стороны >= 1.
            filters: Интенсивности фильтров.
            overlay: Параметры подписи.

        Returns:
            Новое изображение RGBA размером `geometry.size`. Одинаковые входы
            дают побайтно одинаковый результат.
        """
        logger.debug(
            "compose %dx%d -> %dx%d filters=%s text=%s",
            source.width,
            source.height,
            geometry.target_width,
            geometry.target_height,
            filters.as_dict(),
            overlay.is_drawable,
        )
        canvas = self.scale_to_target(source, geometry)
        canvas = self.apply_filters(canvas, filters)
        return self._text_service.draw_overlay(canvas, overlay)
