"""Logging helpers shared by the engine, the CLI and the dashboard."""
from __future__ import annotations

import logging
import os

CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def log_file_path(name: str, log_dir: str) -> str:
    return os.path.join(log_dir, f"{name}.log")


def get_logger(name: str, log_dir: str | None = None, level: int = logging.INFO) -> logging.Logger:
    """Return a logger with one console handler and an optional per-name log file.

    Handlers are attached only the first time a name is requested, so modules
    can call this at import time without stacking duplicates.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)
    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path(name, log_dir), encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)
    return logger


def set_level(logger: logging.Logger, level: int) -> None:
    """Change the level of a logger and of its console handlers."""
    logger.setLevel(level)
    for handler in logger.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)
