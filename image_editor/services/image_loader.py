"""Фоновая загрузка изображений с защитой от устаревших результатов.

Каждый запрос получает номер поколения. Результат доставляется, только если
к моменту завершения его поколение всё ещё последнее: если пользователь успел
открыть другой файл, результат первой загрузки отбрасывается.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from image_editor.errors import DecodeFailure
from image_editor.models.image_model import SourceImage
from image_editor.services.image_service import ImageService
from image_editor.utils.logging import logger

Dispatch = Callable[[Callable[[], None]], None]


def _call_now(callback: Callable[[], None]) -> None:
    callback()


@dataclass(frozen=True)
class LoadRequest:
    """Запущенная загрузка.

    Fields:
        generation: Номер поколения запроса.
        path: Путь к файлу.
        thread: Поток декодирования.
    """
    generation: int
    path: Path
    thread: threading.Thread


class ImageLoader:
    """Запускает `ImageService.load_image` в отдельном потоке.

    `dispatch` переносит доставку результата в нужный поток (для Tk —
    в главный цикл); по умолчанию колбэк вызывается сразу в рабочем потоке.
    """

    def __init__(self, image_service: Optional[ImageService] = None, dispatch: Optional[Dispatch] = None) -> None:
        self._image_service = image_service or ImageService()
        self._dispatch: Dispatch = dispatch or _call_now
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def current_generation(self) -> int:
        with self._lock:
            return self._generation

    def cancel(self) -> None:
        """Делает все незавершённые загрузки устаревшими."""
        with self._lock:
            self._generation += 1

    def load(
        self,
        file_path: str | Path,
        on_loaded: Callable[[SourceImage], None],
        on_failed: Callable[[Exception], None],
    ) -> LoadRequest:
        """Начинает загрузку и сразу возвращает управление.

        Args:
            file_path: Путь к файлу.
            on_loaded: Вызывается с `SourceImage`, если запрос остался актуальным.
            on_failed: Вызывается с `DecodeFailure`/`FileNotFoundError`, если запрос остался актуальным.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
        path = Path(file_path)
        thread = threading.Thread(
            target=self._run,
            args=(generation, path, on_loaded, on_failed),
            name=f"image-load-{generation}",
            daemon=True,
        )
        thread.start()
        return LoadRequest(generation=generation, path=path, thread=thread)

    def _run(
        self,
        generation: int,
        path: Path,
        on_loaded: Callable[[SourceImage], None],
        on_failed: Callable[[Exception], None],
    ) -> None:
        try:
            source = self._image_service.load_image(path)
        except (DecodeFailure, FileNotFoundError) as exc:
            logger.warning("Failed to load %s: %s", path, exc)
            self._dispatch(lambda error=exc: self._deliver(generation, path, on_failed, error))
            return
        self._dispatch(lambda: self._deliver(generation, path, on_loaded, source))

    def _deliver(self, generation: int, path: Path, callback: Callable, payload: object) -> None:
        if generation != self.current_generation:
            logger.debug("Discarding stale load of %s (generation %d)", path, generation)
            return
        callback(payload)
