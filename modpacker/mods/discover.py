# modpacker/mods/discover.py
from __future__ import annotations
import logging
from collections.abc import Iterable
from pathlib import Path

from modpacker.core.errors import PreconditionError
from modpacker.mods.constants import MANIFEST_FILE_NAME

logger = logging.getLogger(__name__)

__all__ = ["discoverModDirs", "findTypeScriptProjects"]



def _dedupe(paths: Iterable[Path]) -> list[Path]:
    out: list[Path] = []
    seen: set[str] = set()
    for path in paths:
        key = str(Path(path).resolve(strict=False))
        if key not in seen:
            out.append(Path(path))
            seen.add(key)
    return out



def _listSubdirs(root: Path) -> list[Path]:
    try:
        entries = list(root.iterdir())
    except OSError as err:
        raise PreconditionError(f"Cannot read mods directory '{root}': {err}") from err
    # Folder name first (case-insensitive), then exact name for determinism
    subdirs = [entry for entry in entries if entry.is_dir()]
    subdirs.sort(key=lambda entry: (entry.name.lower(), entry.name))
    return _dedupe(subdirs)



def discoverModDirs(root: str | Path) -> list[Path]:
    """
    Returns the immediate subdirectories of `root` that contain a boot.json.

    Folders without a manifest are logged and skipped. Raises PreconditionError
    when `root` itself can't be listed, since no mod can be processed then.
    """
    found: list[Path] = []
    for modDir in _listSubdirs(Path(root)):
        if (modDir / MANIFEST_FILE_NAME).is_file():
            found.append(modDir)
        else:
            logger.warning("Skipping '%s': no %s found", modDir, MANIFEST_FILE_NAME)

    logger.info("Mods discovered: %d (root=%s)", len(found), root)
    return found



def findTypeScriptProjects(root: str | Path) -> list[Path]:
    """Immediate subdirectories of `root` holding at least one *.ts file at any depth."""
    projects: list[Path] = []
    for modDir in _listSubdirs(Path(root)):
        if next(modDir.glob("**/*.ts"), None) is not None:
            projects.append(modDir)
    return projects
