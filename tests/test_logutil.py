import logging

from conscalc.logutil import get_logger, log_file_path, set_level


def test_handlers_attached_once():
    first = get_logger("conscalc.tests.once")
    second = get_logger("conscalc.tests.once")
    assert first is second
    assert len(first.handlers) == 1


def test_file_handler_writes(tmp_path):
    logger = get_logger("conscalc.tests.file", log_dir=str(tmp_path))
    logger.info("hello from test")
    for handler in logger.handlers:
        handler.flush()
    path = tmp_path / "conscalc.tests.file.log"
    assert str(path) == log_file_path("conscalc.tests.file", str(tmp_path))
    assert "hello from test" in path.read_text(encoding="utf-8")


def test_set_level_leaves_file_handler_alone(tmp_path):
    logger = get_logger("conscalc.tests.level", log_dir=str(tmp_path))
    set_level(logger, logging.WARNING)
    assert logger.level == logging.WARNING
    file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
    assert file_handlers[0].level == logging.DEBUG
