# modpacker/mods/constants.py
from __future__ import annotations

__all__ = [
    "MANIFEST_FILE_NAME", "DEFAULT_VERSION", "ADDITION_FILE_NAMES",
    "CATEGORY_PATTERNS", "CATEGORY_FIELDS",
]



# Fixed manifest file name inside every mod folder; always packaged.
MANIFEST_FILE_NAME = "boot.json"
DEFAULT_VERSION = "1.0.0"

# Well-known extra files picked up from the mod root only.
ADDITION_FILE_NAMES: tuple[str, ...] = ("README.md", "README.txt", "License.txt", "License")

# (manifest list field, recursive glob pattern), scanned in this order.
CATEGORY_PATTERNS: tuple[tuple[str, str], ...] = (
    ("imgFileList", "**/*.png"),
    ("scriptFileList", "**/*.js"),
    ("styleFileList", "**/*.css"),
    ("tweeFileList", "**/*.twee"),
    ("additionFile", "**/*.js.map"),
)

# Every list consulted for package membership.
CATEGORY_FIELDS: tuple[str, ...] = (
    "imgFileList",
    "scriptFileList",
    "tweeFileList",
    "styleFileList",
    "additionFile",
)
