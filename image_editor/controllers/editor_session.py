"""Состояние редактора и пересборка результата.

Сессия хранит четыре состояния (исходник, геометрия, фильтры, подпись) и
последний собранный результат. Любое изменение — это замена неизменяемого
состояния; пересборка всегда выполняется с нуля.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from PIL import Image

from image_editor.errors import EmptySourceCompose
from image_editor.models.filter_model import FilterState
from image_editor.models.geometry_model import (
    GeometryState,
    on_height_changed,
    on_width_changed,
    parse_dimension,
    with_aspect_lock,
)
from image_editor.models.image_model import SourceImage
from image_editor.models.text_overlay_model import TextOverlayState
from image_editor.services.export_service import ExportService
from image_editor.services.process_service import ProcessService


class EditorSession:
    def __init__(
        self,
        process_service: Optional[ProcessService] = None,
        export_service: Optional[ExportService] = None,
    ) -> None:
        self._process_service = process_service or ProcessService()
        self._export_service = export_service or ExportService()
        self.source: Optional[SourceImage] = None
        self.geometry = GeometryState()
        self.filters = FilterState()
        self.overlay = TextOverlayState()
        self.output: Optional[Image.Image] = None

    @property
    def has_source(self) -> bool:
        return self.source is not None

    # ---- State transitions ----
    def load_source(self, source: SourceImage) -> None:
        """Заменяет исходник; размеры и пропорции берутся из нового изображения.

        Флаг фиксации пропорций, фильтры и подпись сохраняются.
        """
        self.source = source
        self.geometry = GeometryState.from_image(source.width, source.height, aspect_lock=self.geometry.aspect_lock)

    def set_width(self, raw: Union[str, int]) -> GeometryState:
        """Raises: InvalidDimension — состояние при этом не меняется."""
        self.geometry = on_width_changed(self.geometry, parse_dimension(raw))
        return self.geometry

    def set_height(self, raw: Union[str, int]) -> GeometryState:
        """Raises: InvalidDimension — состояние при этом не меняется."""
        self.geometry = on_height_changed(self.geometry, parse_dimension(raw))
        return self.geometry

    def set_aspect_lock(self, locked: bool) -> GeometryState:
        self.geometry = with_aspect_lock(self.geometry, locked)
        return self.geometry

    def set_filter(self, name: str, value: float) -> FilterState:
        self.filters = self.filters.with_value(name, value)
        return self.filters

    def reset_filters(self) -> FilterState:
        self.filters = FilterState()
        return self.filters

    def update_overlay(self, **changes: Any) -> TextOverlayState:
        """Raises: ValueError — при некорректном цвете или координатах; состояние не меняется."""
        self.overlay = self.overlay.with_changes(**changes)
        return self.overlay

    # ---- Output ----
    def recompose(self) -> Image.Image:
        """Собирает результат заново из текущих состояний.

        Raises:
            EmptySourceCompose: если изображение ещё не загружено.
        """
        if self.source is None:
            raise EmptySourceCompose("Нет загруженного изображения")
        output = self._process_service.compose(self.source, self.geometry, self.filters, self.overlay)
        self.output = output
        return output

    def export(self, file_path: Union[str, Path]) -> Path:
        """Сохраняет последний результат в PNG.

        Raises:
            EmptySourceCompose: если результат ещё ни разу не собирался.
        """
        if self.output is None:
            raise EmptySourceCompose("Нечего сохранять: результат ещё не собран")
        return self._export_service.save_png(self.output, file_path)

    def suggest_filename(self) -> str:
        return self._export_service.suggest_filename()

