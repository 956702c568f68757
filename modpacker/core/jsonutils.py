# modpacker/core/jsonutils.py
from __future__ import annotations

import json
from collections.abc import Mapping
from os import PathLike
from typing import Any

__all__ = ["safeJsonDumps", "toJsonable"]



def safeJsonDumps(obj: object) -> str:
    """
    Compact one-line JSON for log records.

    Values json cannot encode (paths, exceptions, models) are converted with
    toJsonable first, so logging never fails on an odd context value.
    """
    try:
        return json.dumps(obj, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except (TypeError, ValueError):
        return json.dumps(toJsonable(obj), ensure_ascii=False, separators=(",", ":"))



def toJsonable(obj: Any, _depth: int = 0) -> Any:
    """Best-effort conversion of build objects (paths, errors, manifests) to plain JSON values."""
    if _depth > 8:
        return f"<nested {type(obj).__name__}>"

    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, PathLike):
        return str(obj).replace("\\", "/")
    if isinstance(obj, BaseException):
        return {"type": type(obj).__name__, "message": str(obj)}
    if hasattr(obj, "model_dump"):
        return toJsonable(obj.model_dump(mode="json"), _depth + 1)
    if isinstance(obj, Mapping):
        return {str(key): toJsonable(value, _depth + 1) for key, value in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [toJsonable(value, _depth + 1) for value in obj]

    return repr(obj)
