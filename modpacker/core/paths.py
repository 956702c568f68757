# modpacker/core/paths.py
from __future__ import annotations
from os import PathLike
from pathlib import Path, PurePath

from modpacker.core.errors import PrefixMismatchError, UnsafePathError

__all__ = ["normalizeSeparators", "relativize", "resolveInside"]



def normalizeSeparators(value: str) -> str:
    """Returns `value` with every backslash turned into a forward slash."""
    return value.replace("\\", "/")



def relativize(path: str | PathLike[str], base: str | PathLike[str]) -> str:
    """
    Returns `path` with the `base` prefix removed, using forward slashes.

    The prefix check is component-wise, so "a/bc" is not under "a/b".
    Raises PrefixMismatchError (carrying both inputs) when `path` is not under `base`.
    """
    purePath = PurePath(normalizeSeparators(str(path)))
    pureBase = PurePath(normalizeSeparators(str(base)))
    try:
        rel = purePath.relative_to(pureBase)
    except ValueError as err:
        raise PrefixMismatchError(path, base) from err
    return normalizeSeparators(rel.as_posix())



def resolveInside(root: str | PathLike[str], name: str) -> Path:
    """
    Returns `root / name` for a plain file name that stays directly inside `root`.

    Names containing path separators, NUL bytes, or consisting of "." / ".."
    are rejected with UnsafePathError, as is anything that resolves outside `root`.
    """
    rootPath = Path(root)
    if not name or name in (".", ".."):
        raise UnsafePathError(name, rootPath, "not a file name")
    if "\x00" in name:
        raise UnsafePathError(name, rootPath, "contains a NUL byte")
    if "/" in name or "\\" in name:
        raise UnsafePathError(name, rootPath, "contains a path separator")

    target = rootPath / name
    rootResolved = rootPath.resolve(strict=False)
    if target.resolve(strict=False).parent != rootResolved:
        raise UnsafePathError(name, rootPath, "resolves outside the directory")
    return target
