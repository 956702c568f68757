# modpacker/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers
from typing import TYPE_CHECKING

from .formatters import DevFormatter, JsonFormatter

if TYPE_CHECKING:
    from modpacker.app.settings import BuildSettings

__all__ = ["LOG_LEVELS", "configureLogging"]



# Config log level names -> logging levels; "trace" is DEBUG plus ModLogger.trace output
LOG_LEVELS: dict[str, int] = {
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}



def configureLogging(settings: BuildSettings) -> None:
    """
    Initiate the logging configuration for one build run.

      - Console pretty logs at the configured level
      - Optional JSON file log with rotation when `log_file` is set
    """
    rootLevel = LOG_LEVELS.get(settings.loglv, logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(rootLevel)

    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(rootLevel)
    consoleHandler.setFormatter(DevFormatter())
    root.addHandler(consoleHandler)

    if settings.log_file:
        fileHandler = logging.handlers.RotatingFileHandler(
            settings.log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        fileHandler.setLevel(rootLevel)
        fileHandler.setFormatter(JsonFormatter())
        root.addHandler(fileHandler)
