# modpacker/core/logging/__init__.py
from __future__ import annotations

from .context import setLogContext, clearLogContext, getLogContext
from .setup import LOG_LEVELS, configureLogging
from .util import ModLogger, getModLogger

__all__ = [
    "LOG_LEVELS",
    "configureLogging",
    "getModLogger",
    "ModLogger",
    "setLogContext",
    "clearLogContext",
    "getLogContext",
]
