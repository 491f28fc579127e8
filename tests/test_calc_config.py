import logging
import os

import pytest

from calc_config import LOG_FILE_NAME, history_size, setup_logging


@pytest.fixture
def fresh_logger(monkeypatch, tmp_path):
    """Логгер "calculator" без обработчиков; после теста всё возвращается как было."""
    logger = logging.getLogger("calculator")
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    logger.handlers.clear()
    monkeypatch.setenv("CALC_LOG_DIR", str(tmp_path))
    yield logger
    for h in logger.handlers:
        h.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


# ------------------ CALC_HISTORY_SIZE ------------------
def test_history_size_default(monkeypatch):
    monkeypatch.delenv("CALC_HISTORY_SIZE", raising=False)
    assert history_size() == 50


@pytest.mark.parametrize("raw", ["abc", "0", "-3", "", "2.5"])
def test_history_size_invalid_falls_back(monkeypatch, caplog, raw):
    monkeypatch.setenv("CALC_HISTORY_SIZE", raw)
    with caplog.at_level(logging.WARNING, logger="calculator"):
        assert history_size() == 50
    assert "CALC_HISTORY_SIZE" in caplog.text


def test_history_size_from_env(monkeypatch):
    monkeypatch.setenv("CALC_HISTORY_SIZE", "7")
    assert history_size() == 7


# ------------------ CALC_LOG_LEVEL ------------------
@pytest.mark.parametrize("raw, level", [
    ("debug", logging.DEBUG),
    ("WARNING", logging.WARNING),
    ("nonsense", logging.INFO),
    ("BASIC_FORMAT", logging.INFO),
])
def test_log_level_from_env(monkeypatch, fresh_logger, raw, level):
    monkeypatch.setenv("CALC_LOG_LEVEL", raw)
    logger = setup_logging()
    assert logger is fresh_logger
    assert logger.level == level
    assert all(h.level == level for h in logger.handlers)


def test_log_level_default(monkeypatch, fresh_logger):
    monkeypatch.delenv("CALC_LOG_LEVEL", raising=False)
    assert setup_logging().level == logging.INFO


def test_setup_is_idempotent(fresh_logger):
    setup_logging()
    count = len(fresh_logger.handlers)
    setup_logging()
    assert len(fresh_logger.handlers) == count


# ------------------ ФАЙЛ ЛОГА ------------------
def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_log_file_in_configured_dir(fresh_logger, tmp_path):
    setup_logging()
    handlers = _file_handlers(fresh_logger)
    assert len(handlers) == 1
    assert handlers[0].baseFilename == os.path.join(str(tmp_path), LOG_FILE_NAME)


def test_unwritable_log_dir_is_skipped(monkeypatch, fresh_logger, tmp_path):
    missing = tmp_path / "missing" / "deeper"
    monkeypatch.setenv("CALC_LOG_DIR", str(missing))
    setup_logging()
    for h in _file_handlers(fresh_logger):
        assert not h.baseFilename.startswith(str(missing))


def test_no_writable_dir_logs_to_console_only(monkeypatch, fresh_logger):
    import calc_config

    monkeypatch.setattr(calc_config, "_file_handler", lambda: None)
    setup_logging()
    assert _file_handlers(fresh_logger) == []
    assert len(fresh_logger.handlers) == 1
