# modpacker/core/logging/util.py
from __future__ import annotations

import logging



class ModLogger:
    """Per-mod logger whose trace() lines only show up with loglv "trace"."""
    def __init__(self, logger: logging.Logger, traceEnabled: bool) -> None:
        self._log = logger
        self._traceEnabled = traceEnabled

    def trace(self, msg: str, *args: object) -> None:
        if self._traceEnabled:
            self._log.debug("[TRACE] " + msg, *args)



def getModLogger(modName: str, *, traceEnabled: bool = False) -> ModLogger:
    return ModLogger(logging.getLogger(f"mod.{str(modName).strip()}"), traceEnabled)
