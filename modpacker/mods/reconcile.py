# modpacker/mods/reconcile.py
from __future__ import annotations
import logging
from pathlib import Path

from modpacker.core.errors import PrefixMismatchError, ScanError
from modpacker.core.paths import relativize
from modpacker.mods.constants import ADDITION_FILE_NAMES, CATEGORY_PATTERNS
from modpacker.mods.manifest import BootManifest

logger = logging.getLogger(__name__)

__all__ = ["reconcileFileLists", "scanAndAddFiles"]



def _isEncodable(relPath: str) -> bool:
    # Undecodable bytes in file names surface as lone surrogates
    try:
        relPath.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True



def scanAndAddFiles(workingDir: Path, pattern: str, fileList: list[str]) -> int:
    """
    Recursively globs `workingDir` for `pattern` and appends every regular file
    not yet in `fileList`, as a forward-slash path relative to `workingDir`.

    The containment check runs against the live list, so a path is never
    appended twice even if two matches relativize to the same string.
    Returns the number of appended entries.
    """
    added = 0
    try:
        matches = sorted(workingDir.glob(pattern))
        for match in matches:
            if not match.is_file():
                continue
            try:
                relPath = relativize(match, workingDir)
            except PrefixMismatchError as err:
                logger.warning("Skipping '%s': %s", match, err)
                continue
            if not _isEncodable(relPath):
                logger.warning("Skipping %r: file name is not valid UTF-8", relPath)
                continue
            if relPath not in fileList:
                fileList.append(relPath)
                added += 1
    except OSError as err:
        raise ScanError(workingDir, pattern, err) from err
    return added



def reconcileFileLists(manifest: BootManifest, workingDir: str | Path) -> int:
    """
    Merges files found in `workingDir` into the manifest's category lists, in place.

    Existing entries and their order are kept; new files are appended in scan
    order. Running it twice over an unchanged directory adds nothing the second
    time. A failing category raises ScanError and the remaining categories are
    not scanned. Returns the total number of added entries.
    """
    workingDir = Path(workingDir)
    added = 0

    for fileName in ADDITION_FILE_NAMES:
        try:
            present = (workingDir / fileName).exists()
        except OSError as err:
            raise ScanError(workingDir, fileName, err) from err
        if present and fileName not in manifest.additionFile:
            manifest.additionFile.append(fileName)
            added += 1

    for field, pattern in CATEGORY_PATTERNS:
        fileList: list[str] = getattr(manifest, field)
        count = scanAndAddFiles(workingDir, pattern, fileList)
        if count:
            logger.debug("Added %d file(s) to %s from '%s'", count, field, pattern)
        added += count

    return added
