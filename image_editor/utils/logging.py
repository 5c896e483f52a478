"""Общий логгер пакета `image_editor`.

Принципы:
- Один именованный логгер на всё приложение; сервисы импортируют готовый `logger`.
- Обработчик добавляется один раз, повторный вызов `get_logger` ничего не дублирует.
"""

from __future__ import annotations

import logging
from typing import Optional

LOGGER_NAME = "image_editor"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LOGGER: Optional[logging.Logger] = None


def get_logger() -> logging.Logger:
    """Возвращает логгер пакета; при первом вызове подключает вывод в stderr."""

    global _LOGGER
    if _LOGGER is None:
        _LOGGER = logging.getLogger(LOGGER_NAME)
        if not _LOGGER.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            _LOGGER.addHandler(handler)
        _LOGGER.setLevel(logging.INFO)
    return _LOGGER


logger = get_logger()
