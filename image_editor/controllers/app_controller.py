"""Контроллер приложения: оркестрация UI, сессии редактора и загрузчика.

SOLID:
- SRP: класс связывает виджеты с `EditorSession` (без логики обработки изображений).
- DIP: зависит от сервисов как от ролей; конкретные реализации создаются по умолчанию.
Clean Code:
- Обработчики компактны; переходы состояния и компоновка — в сессии и сервисах.
"""
from __future__ import annotations

import queue
from dataclasses import dataclass, field
from tkinter import filedialog, TclError
from typing import Any, Callable, Dict, Optional

import customtkinter as ctk

from image_editor import config
from image_editor.controllers.editor_session import EditorSession
from image_editor.errors import EmptySourceCompose, InvalidDimension
from image_editor.models.image_model import SourceImage
from image_editor.services.image_loader import ImageLoader
from image_editor.ui.bottom_bar import BottomBar
from image_editor.ui.image_viewer import ImageViewer
from image_editor.ui.sidebar import Sidebar
from image_editor.utils.logging import logger


@dataclass
class AppController:
    """Связывает элементы UI с состоянием редактора.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Фоновая загрузка изображений через `ImageLoader`; результат переносится в поток Tk.
    - Пересборка результата после любого изменения состояния (не чаще раза за idle-тик).
    - Сохранение результата и сообщения в строке состояния.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _session: EditorSession = field(default_factory=EditorSession)
    _loader: Optional[ImageLoader] = None
    _loader_queue: "queue.Queue[Callable[[], None]]" = field(default_factory=queue.Queue)
    _pending_recompose: Optional[str] = None

    def __post_init__(self) -> None:
        if self._loader is None:
            self._loader = ImageLoader(dispatch=self._loader_queue.put)

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_width_commit = self._handle_width_commit
        self.sidebar.on_height_commit = self._handle_height_commit
        self.sidebar.on_aspect_lock_change = self._handle_aspect_lock_change
        self.sidebar.on_filter_change = self._handle_filter_change
        self.sidebar.on_filters_reset = self._handle_filters_reset
        self.sidebar.on_overlay_change = self._handle_overlay_change

        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_zoom_change = self._handle_zoom_change
        self.bottom.on_zoom_preset = self._handle_zoom_change
        self.bottom.on_zoom_fit = self._handle_zoom_fit
        self.bottom.on_download = self._handle_download

        self.sidebar.set_geometry(self._session.geometry)
        self.sidebar.set_filters(self._session.filters)
        self.sidebar.set_overlay(self._session.overlay)
        self.viewer.set_image(None)
        self._poll_loader()

    # ---- Loading ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите изображение",
                filetypes=config.OPEN_FILETYPES,
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        self.bottom.show_message("Загрузка…")
        self._loader.load(file_path, on_loaded=self._on_image_loaded, on_failed=self._on_image_failed)

    def _poll_loader(self) -> None:
        while True:
            try:
                callback = self._loader_queue.get_nowait()
            except queue.Empty:
                break
            callback()
        self.window.after(config.LOADER_POLL_MS, self._poll_loader)

    def _on_image_loaded(self, source: SourceImage) -> None:
        self._session.load_source(source)
        self.sidebar.set_image_info(source)
        self.sidebar.set_geometry(self._session.geometry)
        self._cancel_pending_recompose()
        self.viewer.set_image(self._session.recompose(), reset_view=True)
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
        self.bottom.set_download_enabled(True)
        self.bottom.show_message("Изображение загружено", f"Размер: {source.width}x{source.height}px")

    def _on_image_failed(self, error: Exception) -> None:
        # previous image and output stay as they were
        self.bottom.show_message("Не удалось открыть файл", str(error))

    # ---- Geometry ----
    def _handle_width_commit(self, raw: str) -> None:
        self._apply_dimension(self._session.set_width, raw)

    def _handle_height_commit(self, raw: str) -> None:
        self._apply_dimension(self._session.set_height, raw)

    def _apply_dimension(self, setter: Callable[[str], Any], raw: str) -> None:
        before = self._session.geometry
        try:
            setter(raw)
        except InvalidDimension as exc:
            logger.info("Rejected dimension input %r: %s", raw, exc)
            self.bottom.show_message("Некорректный размер", str(exc))
        self.sidebar.set_geometry(self._session.geometry)
        if self._session.geometry != before:
            self._schedule_recompose()

    def _handle_aspect_lock_change(self, locked: bool) -> None:
        self._session.set_aspect_lock(locked)

    # ---- Filters ----
    def _handle_filter_change(self, name: str, value: int) -> None:
        self._session.set_filter(name, value)
        self._schedule_recompose()

    def _handle_filters_reset(self) -> None:
        self.sidebar.set_filters(self._session.reset_filters())
        self._schedule_recompose()
        self.bottom.show_message("Фильтры сброшены")

    # ---- Text overlay ----
    def _handle_overlay_change(self, changes: Dict[str, Any]) -> None:
        try:
            self._session.update_overlay(**changes)
        except ValueError as exc:
            logger.info("Rejected overlay input %r: %s", changes, exc)
            self.bottom.show_message("Некорректное значение", str(exc))
        self.sidebar.set_overlay(self._session.overlay)
        self._schedule_recompose()

    # ---- Recomposition ----
    def _schedule_recompose(self) -> None:
        # coalesce slider bursts into one compose per idle tick
        if not self._session.has_source or self._pending_recompose is not None:
            return
        self._pending_recompose = self.window.after_idle(self._recompose)

    def _cancel_pending_recompose(self) -> None:
        if self._pending_recompose is not None:
            self.window.after_cancel(self._pending_recompose)
            self._pending_recompose = None

    def _recompose(self) -> None:
        self._pending_recompose = None
        try:
            output = self._session.recompose()
        except EmptySourceCompose:
            return
        self.viewer.set_image(output)

    # ---- Export ----
    def _handle_download(self) -> None:
        if self._session.output is None:
            return
        try:
            file_path = filedialog.asksaveasfilename(
                title="Сохранить результат",
                initialfile=self._session.suggest_filename(),
                defaultextension=".png",
                filetypes=config.SAVE_FILETYPES,
            )
        except TclError:
            return
        if not file_path:
            return
        try:
            saved = self._session.export(file_path)
        except OSError as exc:
            logger.error("Export to %s failed: %s", file_path, exc)
            self.bottom.show_message("Не удалось сохранить файл", str(exc))
            return
        self.bottom.show_message("Изображение сохранено", f"Файл: {saved.name}")

    # ---- Zoom ----
    def _handle_zoom_change(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        # Sync bottom bar when user zooms with mouse wheel
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
