# modpacker/core/errors.py
from __future__ import annotations
from pathlib import Path

__all__ = [
    "ModPackerError", "ManifestIOError", "ManifestParseError",
    "ManifestSerializeError", "ScanError", "PrefixMismatchError",
    "PackIOError", "UnsafePathError", "SettingsError", "PreconditionError",
]



class ModPackerError(Exception):
    """Base class for every error raised by modpacker."""
    pass



class ManifestIOError(ModPackerError):
    """boot.json could not be read or written."""
    def __init__(self, path: str | Path, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot access manifest '{self.path}': {cause}")



class ManifestParseError(ModPackerError):
    """boot.json is not valid JSON or does not match the manifest structure."""
    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Malformed manifest '{self.path}': {reason}")



class ManifestSerializeError(ModPackerError):
    def __init__(self, path: str | Path, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Cannot serialize manifest '{self.path}': {cause}")



class ScanError(ModPackerError):
    """Directory traversal failed while collecting files for a category."""
    def __init__(self, directory: str | Path, pattern: str, cause: BaseException):
        self.directory = Path(directory)
        self.pattern = pattern
        self.cause = cause
        super().__init__(f"Scanning '{self.directory}' for '{pattern}' failed: {cause}")



class PrefixMismatchError(ModPackerError):
    """Raised when a path does not live under the base it is relativized against."""
    def __init__(self, path: str | Path, base: str | Path):
        self.path = str(path)
        self.base = str(base)
        super().__init__(f"Path '{self.path}' does not start with '{self.base}'")



class PackIOError(ModPackerError):
    """Pruning or archive writing hit a filesystem error."""
    def __init__(self, path: str | Path, cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Packaging I/O failure at '{self.path}': {cause}")



class UnsafePathError(ModPackerError):
    """A generated file name would not stay inside its target directory."""
    def __init__(self, name: str, base: str | Path, reason: str):
        self.name = name
        self.base = Path(base)
        self.reason = reason
        super().__init__(f"Refusing to write {name!r} under '{self.base}': {reason}")



class SettingsError(ModPackerError):
    pass



class PreconditionError(ModPackerError):
    """A run-wide requirement failed before any mod was processed."""
    pass
