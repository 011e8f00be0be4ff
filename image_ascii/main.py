"""Точка входа в приложение."""
import sys

from image_ascii.app import AsciiArtApp
from image_ascii.logging_config import setup_logging


def main() -> None:
    """Создаёт и запускает главное окно; путь к изображению можно передать аргументом."""
    setup_logging()
    app = AsciiArtApp()
    if len(sys.argv) > 1:
        app.after(100, app.open_image, sys.argv[1])
    app.mainloop()


if __name__ == "__main__":
    main()
