"""Боковая панель: открытие файла, информация, размер, фильтры, подпись.

Принципы:
- SRP: управляет только виджетами параметров, не содержит алгоритмов.
- ISP: отдаёт изменения через колбэки `on_*`, принимает состояние через `set_*`.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import customtkinter as ctk

from image_editor import config
from image_editor.models.filter_model import FILTER_NAMES, FILTER_RANGES, FilterState
from image_editor.models.geometry_model import GeometryState
from image_editor.models.image_model import SourceImage
from image_editor.models.text_overlay_model import TextOverlayState

_FILTER_LABELS: Dict[str, str] = {
    "brightness": "Яркость",
    "contrast": "Контрастность",
    "grayscale": "Черно-белый",
    "sepia": "Сепия",
}


def _format_size(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "—"
    if size_bytes < 1024:
        return f"{size_bytes} Б"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} КБ"
    return f"{size_bytes / (1024 * 1024):.1f} МБ"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, вкладки «Размер», «Фильтры», «Текст»."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=300, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_width_commit: Optional[Callable[[str], None]] = None
        self.on_height_commit: Optional[Callable[[str], None]] = None
        self.on_aspect_lock_change: Optional[Callable[[bool], None]] = None
        self.on_filter_change: Optional[Callable[[str, int], None]] = None
        self.on_filters_reset: Optional[Callable[[], None]] = None
        self.on_overlay_change: Optional[Callable[[Dict[str, Any]], None]] = None

        # Controls
        self._title = ctk.CTkLabel(self, text="Инструменты", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Загрузить изображение…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Информация", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")
        self._mode_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=270, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")
        self._info_mode = ctk.CTkLabel(self, textvariable=self._mode_val, anchor="w", justify="left")

        self._info_path.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=5, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_mode.grid(row=6, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Вкладки параметров
        self._tabs = ctk.CTkTabview(self)
        self._tabs.grid(row=7, column=0, padx=8, pady=(0, 8), sticky="nsew")
        self._tabs.add("Размер")
        self._tabs.add("Фильтры")
        self._tabs.add("Текст")
        self.grid_rowconfigure(7, weight=1)

        self._build_resize_tab(self._tabs.tab("Размер"))
        self._build_filters_tab(self._tabs.tab("Фильтры"))
        self._build_text_tab(self._tabs.tab("Текст"))

    # ---- Layout ----
    def _build_resize_tab(self, tab: ctk.CTkFrame) -> None:
        tab.grid_columnconfigure(0, weight=1)

        self._width_val = ctk.StringVar(value=str(config.DEFAULT_WIDTH))
        self._height_val = ctk.StringVar(value=str(config.DEFAULT_HEIGHT))
        self._aspect_lock_val = ctk.BooleanVar(value=config.DEFAULT_ASPECT_LOCK)

        ctk.CTkLabel(tab, text="Ширина (px)").grid(row=0, column=0, padx=6, pady=(6, 2), sticky="w")
        self._width_entry = ctk.CTkEntry(tab, textvariable=self._width_val)
        self._width_entry.grid(row=1, column=0, padx=6, pady=(0, 6), sticky="ew")
        self._width_entry.bind("<Return>", self._on_width_commit)
        self._width_entry.bind("<FocusOut>", self._on_width_commit)

        ctk.CTkLabel(tab, text="Высота (px)").grid(row=2, column=0, padx=6, pady=(6, 2), sticky="w")
        self._height_entry = ctk.CTkEntry(tab, textvariable=self._height_val)
        self._height_entry.grid(row=3, column=0, padx=6, pady=(0, 6), sticky="ew")
        self._height_entry.bind("<Return>", self._on_height_commit)
        self._height_entry.bind("<FocusOut>", self._on_height_commit)

        self._aspect_lock_cb = ctk.CTkCheckBox(
            tab,
            text="Сохранять пропорции",
            variable=self._aspect_lock_val,
            command=self._on_aspect_lock_toggle,
        )
        self._aspect_lock_cb.grid(row=4, column=0, padx=6, pady=(8, 6), sticky="w")

    def _build_filters_tab(self, tab: ctk.CTkFrame) -> None:
        tab.grid_columnconfigure(0, weight=1)
        self._filter_sliders: Dict[str, ctk.CTkSlider] = {}
        self._filter_values: Dict[str, ctk.StringVar] = {}

        row = 0
        for name in FILTER_NAMES:
            low, high, identity = FILTER_RANGES[name]
            value_var = ctk.StringVar(value=f"{identity}%")
            header = ctk.CTkFrame(tab, fg_color="transparent")
            header.grid(row=row, column=0, padx=6, pady=(6, 0), sticky="ew")
            header.grid_columnconfigure(0, weight=1)
            ctk.CTkLabel(header, text=_FILTER_LABELS[name]).grid(row=0, column=0, sticky="w")
            ctk.CTkLabel(header, textvariable=value_var, width=48, anchor="e").grid(row=0, column=1, sticky="e")

            slider = ctk.CTkSlider(
                tab,
                from_=low,
                to=high,
                number_of_steps=high - low,
                command=lambda value, n=name: self._on_filter_slider(n, value),
            )
            slider.set(identity)
            slider.grid(row=row + 1, column=0, padx=6, pady=(0, 6), sticky="ew")

            self._filter_sliders[name] = slider
            self._filter_values[name] = value_var
            row += 2

        self._reset_btn = ctk.CTkButton(tab, text="Сбросить фильтры", command=self._emit_filters_reset)
        self._reset_btn.grid(row=row, column=0, padx=6, pady=(10, 6), sticky="ew")

    def _build_text_tab(self, tab: ctk.CTkFrame) -> None:
        tab.grid_columnconfigure((0, 1), weight=1)
        defaults = TextOverlayState()

        self._show_text_val = ctk.BooleanVar(value=defaults.visible)
        self._show_text_cb = ctk.CTkCheckBox(
            tab, text="Показать текст", variable=self._show_text_val, command=self._on_show_text_toggle
        )
        self._show_text_cb.grid(row=0, column=0, columnspan=2, padx=6, pady=(6, 6), sticky="w")

        ctk.CTkLabel(tab, text="Текст").grid(row=1, column=0, columnspan=2, padx=6, pady=(4, 2), sticky="w")
        self._text_val = ctk.StringVar(value=defaults.text)
        self._text_entry = ctk.CTkEntry(tab, textvariable=self._text_val, placeholder_text="Введите текст")
        self._text_entry.grid(row=2, column=0, columnspan=2, padx=6, pady=(0, 6), sticky="ew")
        self._text_entry.bind("<KeyRelease>", self._on_text_edit)

        low, high = config.FONT_SIZE_RANGE
        self._font_size_val = ctk.StringVar(value=f"{defaults.font_size}px")
        ctk.CTkLabel(tab, text="Размер шрифта").grid(row=3, column=0, padx=6, pady=(4, 2), sticky="w")
        ctk.CTkLabel(tab, textvariable=self._font_size_val, width=48, anchor="e").grid(
            row=3, column=1, padx=6, pady=(4, 2), sticky="e"
        )
        self._font_size_slider = ctk.CTkSlider(
            tab, from_=low, to=high, number_of_steps=high - low, command=self._on_font_size_change
        )
        self._font_size_slider.set(defaults.font_size)
        self._font_size_slider.grid(row=4, column=0, columnspan=2, padx=6, pady=(0, 6), sticky="ew")

        ctk.CTkLabel(tab, text="Цвет текста").grid(row=5, column=0, columnspan=2, padx=6, pady=(4, 2), sticky="w")
        self._color_val = ctk.StringVar(value=defaults.color)
        self._color_swatch = ctk.CTkLabel(tab, text="", width=32, height=24, fg_color=defaults.color, corner_radius=4)
        self._color_swatch.grid(row=6, column=0, padx=6, pady=(0, 6), sticky="w")
        self._color_entry = ctk.CTkEntry(tab, textvariable=self._color_val)
        self._color_entry.grid(row=6, column=1, padx=6, pady=(0, 6), sticky="ew")
        self._color_entry.bind("<Return>", self._on_color_commit)
        self._color_entry.bind("<FocusOut>", self._on_color_commit)

        self._x_val = ctk.StringVar(value=str(defaults.x))
        self._y_val = ctk.StringVar(value=str(defaults.y))
        ctk.CTkLabel(tab, text="Позиция X").grid(row=7, column=0, padx=6, pady=(4, 2), sticky="w")
        ctk.CTkLabel(tab, text="Позиция Y").grid(row=7, column=1, padx=6, pady=(4, 2), sticky="w")
        self._x_entry = ctk.CTkEntry(tab, textvariable=self._x_val, width=80)
        self._y_entry = ctk.CTkEntry(tab, textvariable=self._y_val, width=80)
        self._x_entry.grid(row=8, column=0, padx=6, pady=(0, 8), sticky="ew")
        self._y_entry.grid(row=8, column=1, padx=6, pady=(0, 8), sticky="ew")
        for entry, axis in ((self._x_entry, "x"), (self._y_entry, "y")):
            entry.bind("<Return>", lambda _e, a=axis: self._on_position_commit(a))
            entry.bind("<FocusOut>", lambda _e, a=axis: self._on_position_commit(a))

    # ---- Public API (sync from controller) ----
    def set_image_info(self, image: SourceImage) -> None:
        self._path_val.set(f"Файл: {image.path.name}")
        self._size_val.set(f"Размер файла: {_format_size(image.size_bytes)}")
        self._dims_val.set(f"Размер: {image.width}×{image.height} px")
        self._mode_val.set(f"Режим: {image.mode}")

    def set_geometry(self, geometry: GeometryState) -> None:
        self._width_val.set(str(geometry.target_width))
        self._height_val.set(str(geometry.target_height))
        self._aspect_lock_val.set(geometry.aspect_lock)

    def set_filters(self, filters: FilterState) -> None:
        for name, value in filters.as_dict().items():
            self._filter_sliders[name].set(value)
            self._filter_values[name].set(f"{int(round(value))}%")

    def set_overlay(self, overlay: TextOverlayState) -> None:
        self._show_text_val.set(overlay.visible)
        if self._text_val.get() != overlay.text:
            self._text_val.set(overlay.text)
        self._font_size_slider.set(overlay.font_size)
        self._font_size_val.set(f"{overlay.font_size}px")
        self._color_val.set(overlay.color)
        self._color_swatch.configure(fg_color=overlay.color)
        self._x_val.set(str(overlay.x))
        self._y_val.set(str(overlay.y))

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _on_width_commit(self, _event=None) -> None:
        if self.on_width_commit:
            self.on_width_commit(self._width_val.get())

    def _on_height_commit(self, _event=None) -> None:
        if self.on_height_commit:
            self.on_height_commit(self._height_val.get())

    def _on_aspect_lock_toggle(self) -> None:
        if self.on_aspect_lock_change:
            self.on_aspect_lock_change(bool(self._aspect_lock_val.get()))

    def _on_filter_slider(self, name: str, value: float) -> None:
        percent = int(round(value))
        self._filter_values[name].set(f"{percent}%")
        if self.on_filter_change:
            self.on_filter_change(name, percent)

    def _emit_filters_reset(self) -> None:
        if self.on_filters_reset:
            self.on_filters_reset()

    def _on_show_text_toggle(self) -> None:
        self._emit_overlay_change(visible=bool(self._show_text_val.get()))

    def _on_text_edit(self, _event=None) -> None:
        self._emit_overlay_change(text=self._text_val.get())

    def _on_font_size_change(self, value: float) -> None:
        size = int(round(value))
        self._font_size_val.set(f"{size}px")
        self._emit_overlay_change(font_size=size)

    def _on_color_commit(self, _event=None) -> None:
        self._emit_overlay_change(color=self._color_val.get())

    def _on_position_commit(self, axis: str) -> None:
        raw = self._x_val.get() if axis == "x" else self._y_val.get()
        self._emit_overlay_change(**{axis: raw})

    def _emit_overlay_change(self, **changes: Any) -> None:
        if self.on_overlay_change:
            self.on_overlay_change(changes)
