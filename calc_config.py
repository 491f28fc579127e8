"""
Настройка логирования и чтение переменных окружения.

- CALC_LOG_LEVEL — уровень логирования (по умолчанию INFO).
- CALC_LOG_DIR — каталог для calculator.log (по умолчанию каталог
  приложения, затем текущий каталог).
- CALC_HISTORY_SIZE — размер истории (по умолчанию 50).
"""

import logging
from logging.handlers import RotatingFileHandler
import os

from calc_history import DEFAULT_CAPACITY

LOG_FILE_NAME = "calculator.log"


# ------------------ ЛОГИРОВАНИЕ ------------------
def _log_level():
    level_name = os.getenv("CALC_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    # getattr находит и не-уровни вроде BASIC_FORMAT
    if not isinstance(level, int):
        level = logging.INFO
    return level


def _file_handler():
    candidates = (
        os.getenv("CALC_LOG_DIR"),
        os.path.dirname(os.path.abspath(__file__)),
        os.getcwd(),
    )
    for directory in candidates:
        if not directory:
            continue
        log_path = os.path.join(directory, LOG_FILE_NAME)
        try:
            return RotatingFileHandler(log_path, maxBytes=512_000, backupCount=2, encoding="utf-8")
        except OSError:
            continue
    return None


def setup_logging():
    level = _log_level()

    logger = logging.getLogger("calculator")
    logger.setLevel(level)

    if logger.handlers:
        return logger  # уже настроен

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

    # Консоль
    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    # Файл: первый каталог, куда удалось открыть лог
    fh = _file_handler()
    if fh is None:
        logger.warning("Не удалось открыть %s ни в одном каталоге, лог только в консоль", LOG_FILE_NAME)
    else:
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


# ------------------ КОНФИГУРАЦИЯ ------------------
def history_size():
    raw = os.getenv("CALC_HISTORY_SIZE")
    if raw is None:
        return DEFAULT_CAPACITY
    try:
        size = int(raw)
    except ValueError:
        size = 0
    if size <= 0:
        logging.getLogger("calculator").warning(
            "Некорректный CALC_HISTORY_SIZE=%r, используется %s", raw, DEFAULT_CAPACITY)
        return DEFAULT_CAPACITY
    return size
