"""Точка входа в приложение."""
from image_editor.app import ImageEditorApp
from image_editor.utils.logging import logger


def main() -> None:
    """Создаёт и запускает главное окно редактора."""
    logger.info("Starting image editor")
    app = ImageEditorApp()
    app.mainloop()


if __name__ == "__main__":
    main()
