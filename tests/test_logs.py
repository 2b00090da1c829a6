import logging

from colorbook.logs import configure_logging


def _restore(root, level, handlers):
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


def test_configure_logging_sets_level_once():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    try:
        assert configure_logging({"log_level": "debug"}) == logging.DEBUG
        assert root.level == logging.DEBUG
        count = len(root.handlers)
        configure_logging({"log_level": "WARNING"})
        assert len(root.handlers) == count
        assert root.level == logging.WARNING
    finally:
        _restore(root, level, handlers)


def test_configure_logging_falls_back_to_info():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    try:
        assert configure_logging({"log_level": "chatty"}) == logging.INFO
    finally:
        _restore(root, level, handlers)


def test_configure_logging_reinstalls_its_own_handler():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    try:
        configure_logging({})
        added = [handler for handler in root.handlers if handler not in handlers]
        assert len(added) == 1
        root.removeHandler(added[0])
        configure_logging({})
        again = [handler for handler in root.handlers if handler not in handlers]
        assert again == added
    finally:
        _restore(root, level, handlers)
