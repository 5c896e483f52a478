"""Константы приложения: размеры окна, диапазоны фильтров, значения по умолчанию.

Настройки не сохраняются между запусками: всё состояние редактора живёт в памяти.
"""
from __future__ import annotations

from PIL import Image

APP_TITLE = "Редактор изображений"
WINDOW_MIN_SIZE = (1000, 640)

# Geometry
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_ASPECT_LOCK = True
MAX_DIMENSION = 10000

# Filters: (min, max, identity)
BRIGHTNESS_RANGE = (0, 200, 100)
CONTRAST_RANGE = (0, 200, 100)
GRAYSCALE_RANGE = (0, 100, 0)
SEPIA_RANGE = (0, 100, 0)

# Text overlay
FONT_SIZE_RANGE = (12, 120)
DEFAULT_TEXT = "Ваш текст"
DEFAULT_FONT_SIZE = 48
DEFAULT_TEXT_COLOR = "#FFFFFF"
DEFAULT_TEXT_POSITION = (50, 50)
FONT_CANDIDATES = (
    "Roboto-Regular.ttf",
    "DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/System/Library/Fonts/Helvetica.ttc",
    "arial.ttf",
)

# Compose / export
RESAMPLE = Image.Resampling.LANCZOS
EXPORT_FILENAME = "edited-image.png"
OPEN_FILETYPES = (
    ("Images", "*.png *.jpg *.jpeg *.gif *.bmp *.tiff *.webp"),
    ("All files", "*.*"),
)
SAVE_FILETYPES = (("PNG", "*.png"),)

# UI
STATUS_TIMEOUT_MS = 4000
LOADER_POLL_MS = 50
