# modpacker/core/logging/formatters.py
from __future__ import annotations

import logging

from modpacker.core.jsonutils import safeJsonDumps
from .context import getLogContext



class JsonFormatter(logging.Formatter):
    """One-line JSON records for the build log file."""
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": int(record.created * 1000),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
            "ctx": getLogContext() or {},
        }

        if record.exc_info:
            excType = record.exc_info[0]
            excValue = record.exc_info[1]
            typ = getattr(excType, "__name__", type(excType).__name__)
            base["exc"] = {
                "type": typ,
                "message": str(excValue),
                "stack": self.formatException(record.exc_info),
            }

        return safeJsonDumps(base)



class DevFormatter(logging.Formatter):
    """Human-friendly console formatter."""
    def format(self, record: logging.LogRecord) -> str:
        ctx = getLogContext()
        ctxStr = ""
        if ctx:
            modName = ctx.get("modName") or ctx.get("modDir")
            if modName:
                ctxStr = f" [{modName}]"
        msg = record.getMessage()
        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)
        if record.stack_info:
            msg += "\n" + str(record.stack_info)
        return f"{record.levelname}: [{record.name}] {msg}{ctxStr}"
