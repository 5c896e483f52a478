"""Ошибки редактора.

Каждая ошибка относится к одной попытке (загрузка, ввод, компоновка) и не
затрагивает последний успешно собранный результат.
"""
from __future__ import annotations


class ImageEditorError(Exception):
    """Базовый класс ошибок редактора."""


class DecodeFailure(ImageEditorError, ValueError):
    """Файл не удалось декодировать как изображение."""


class InvalidDimension(ImageEditorError, ValueError):
    """Ширина или высота не является положительным целым в допустимых пределах."""


class EmptySourceCompose(ImageEditorError, RuntimeError):
    """Компоновка или экспорт запрошены до загрузки исходного изображения."""
