# modpacker/tools/mirror.py
from __future__ import annotations
import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

__all__ = ["VCS_DIR_NAMES", "mirrorTree"]



VCS_DIR_NAMES: frozenset[str] = frozenset({".git", ".svn", ".hg"})



def _ignoreVcs(directory: str, names: list[str]) -> set[str]:
    return {name for name in names if name in VCS_DIR_NAMES and (Path(directory) / name).is_dir()}



def mirrorTree(src: str | Path, dst: str | Path) -> Path:
    """
    Copies the whole tree `src` into `dst`, skipping version-control directories.

    `dst` may already exist; files in it are overwritten. Raises OSError
    (shutil.Error for partial copies) on failure.
    """
    source = Path(src)
    destination = Path(dst)
    shutil.copytree(source, destination, ignore=_ignoreVcs, dirs_exist_ok=True)
    logger.debug("Mirrored '%s' -> '%s'", source, destination)
    return destination
