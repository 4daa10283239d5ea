"""Точка входа в приложение."""
from finalpic.app import FinalPicApp
from finalpic.logger import setup_logger


def main() -> None:
    """Настраивает логирование, создаёт и запускает главное окно приложения."""
    setup_logger()
    app = FinalPicApp()
    app.mainloop()


if __name__ == "__main__":
    main()
