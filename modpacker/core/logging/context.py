# modpacker/core/logging/context.py
from __future__ import annotations
import contextvars

# Fields describing the mod being processed; rendered by both formatters.
_modContext: contextvars.ContextVar[dict[str, object] | None] = contextvars.ContextVar("modpacker.logctx", default=None)



def setLogContext(**fields: object) -> None:
    """Adds `fields` (modName, modDir, ...) to the current context; None values are ignored."""
    merged = dict(_modContext.get() or {})
    merged.update({key: value for key, value in fields.items() if value is not None})
    _modContext.set(merged)



def clearLogContext() -> None:
    _modContext.set(None)



def getLogContext() -> dict[str, object] | None:
    return _modContext.get()
