# modpacker/packs/builder.py
from __future__ import annotations
import logging
import os
import shutil
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile, ZipInfo

from modpacker.core.errors import PackIOError
from modpacker.core.paths import relativize, resolveInside
from modpacker.mods.manifest import BootManifest

logger = logging.getLogger(__name__)

__all__ = [
    "ArchiveOptions", "PruneReport", "PackageResult",
    "walkTree", "pruneTree", "writeArchive", "buildPackage",
    "renderArchiveName", "resolveArchivePath",
]



Compression = Literal["stored", "deflated"]

_COMPRESSION_METHODS: dict[str, int] = {
    "stored": ZIP_STORED,
    "deflated": ZIP_DEFLATED,
}

# Portable permission bits stored in every entry, independent of the host.
_FILE_ATTR = (0o100644 & 0xFFFF) << 16
_DIR_ATTR = ((0o040755 & 0xFFFF) << 16) | 0x10 # 0x10: MS-DOS directory flag



@dataclass(frozen=True, slots=True)
class ArchiveOptions:
    compression: Compression = "deflated"
    compressLevel: int | None = None

    def method(self) -> int:
        try:
            return _COMPRESSION_METHODS[self.compression]
        except KeyError:
            raise ValueError(f"Unsupported compression '{self.compression}'") from None



@dataclass(slots=True)
class PruneReport:
    deletedFiles: list[str] = field(default_factory=list)
    removedDirs: list[str] = field(default_factory=list)



@dataclass(slots=True)
class PackageResult:
    outputPath: Path
    fileCount: int = 0
    dirCount: int = 0
    pruned: PruneReport = field(default_factory=PruneReport)



def walkTree(root: Path) -> Iterator[tuple[Path, bool]]:
    """
    Yields (path, isDir) for everything below `root`, depth-first, with the
    entries of each directory sorted by name. Symlinks are not followed.
    """
    with os.scandir(root) as iterator:
        entries = sorted(iterator, key=lambda entry: entry.name)
    for entry in entries:
        isDir = entry.is_dir(follow_symlinks=False)
        path = Path(entry.path)
        yield path, isDir
        if isDir:
            yield from walkTree(path)



def pruneTree(workingDir: str | Path, isMember: Callable[[str], bool]) -> PruneReport:
    """
    Deletes every file under `workingDir` that `isMember` rejects, then every
    directory left without a regular file at any depth.

    Classification happens on a full listing before anything is deleted.
    Raises PackIOError on filesystem failures.
    """
    root = Path(workingDir)
    report = PruneReport()

    try:
        entries = list(walkTree(root))
    except OSError as err:
        raise PackIOError(root, err) from err

    files = [path for path, isDir in entries if not isDir]
    dirs = [path for path, isDir in entries if isDir]

    doomed: list[tuple[Path, str]] = []
    kept: list[Path] = []
    for path in files:
        relPath = relativize(path, root)
        if isMember(relPath):
            kept.append(path)
        else:
            doomed.append((path, relPath))

    # Directories holding at least one kept file somewhere below them
    occupied: set[Path] = set()
    for path in kept:
        parent = path.parent
        while parent != root and parent not in occupied:
            occupied.add(parent)
            parent = parent.parent

    for path, relPath in doomed:
        try:
            path.unlink()
        except OSError as err:
            raise PackIOError(path, err) from err
        report.deletedFiles.append(relPath)
        logger.debug("Pruned file '%s'", relPath)

    removed: list[Path] = []
    for path in dirs:
        if path in occupied:
            continue
        # Parents sort before children, so a removed ancestor already took this one
        if any(path.is_relative_to(done) for done in removed):
            continue
        try:
            shutil.rmtree(path)
        except OSError as err:
            raise PackIOError(path, err) from err
        removed.append(path)
        report.removedDirs.append(relativize(path, root))
        logger.debug("Removed empty directory '%s'", report.removedDirs[-1])

    return report



def _fileInfo(path: Path, arcname: str, options: ArchiveOptions) -> ZipInfo:
    info = ZipInfo.from_file(path, arcname, strict_timestamps=False)
    info.compress_type = options.method()
    info.external_attr = _FILE_ATTR
    return info



def _dirInfo(path: Path, arcname: str) -> ZipInfo:
    info = ZipInfo.from_file(path, arcname, strict_timestamps=False)
    info.compress_type = ZIP_STORED
    info.external_attr = _DIR_ATTR
    return info



def writeArchive(workingDir: str | Path, outputPath: str | Path, options: ArchiveOptions | None = None) -> PackageResult:
    """
    Streams the tree under `workingDir` into a new zip at `outputPath`.

    Entry names are relative to `workingDir`. A partially written archive is
    removed before PackIOError is raised; that includes entry names zip can't
    encode and target paths the OS rejects outright (ValueError).
    """
    root = Path(workingDir)
    target = Path(outputPath)
    options = options or ArchiveOptions()
    result = PackageResult(outputPath=target)
    method = options.method()
    created = False

    try:
        with ZipFile(target, "w", compression=method, compresslevel=options.compressLevel) as archive:
            created = True
            for path, isDir in walkTree(root):
                arcname = relativize(path, root)
                if isDir:
                    archive.writestr(_dirInfo(path, arcname), b"")
                    result.dirCount += 1
                    continue
                info = _fileInfo(path, arcname, options)
                with path.open("rb") as source, archive.open(info, "w") as sink:
                    shutil.copyfileobj(source, sink, 1024 * 1024)
                result.fileCount += 1
                logger.debug("Archived '%s'", arcname)
    except (OSError, ValueError) as err:
        if created:
            target.unlink(missing_ok=True)
        raise PackIOError(target, err) from err

    return result



def buildPackage(
    workingDir: str | Path,
    manifest: BootManifest,
    outputPath: str | Path,
    options: ArchiveOptions | None = None,
) -> PackageResult:
    """
    Prunes `workingDir` down to the manifest's members, then archives what is left.

    Destructive: `workingDir` must be a disposable copy of the mod.
    """
    pruned = pruneTree(workingDir, manifest.isMember)
    logger.info(
        "Pruned %d file(s) and %d empty dir(s) from '%s'",
        len(pruned.deletedFiles), len(pruned.removedDirs), workingDir,
    )
    result = writeArchive(workingDir, outputPath, options)
    result.pruned = pruned
    return result



def renderArchiveName(template: str, manifest: BootManifest) -> str:
    """Substitutes {name}, {version} and {ver} in the configured file name template."""
    return (
        template
        .replace("{name}", manifest.name)
        .replace("{version}", manifest.version)
        .replace("{ver}", manifest.version)
    )



def resolveArchivePath(resultsDir: str | Path, template: str, manifest: BootManifest) -> Path:
    """
    Renders the archive file name for `manifest` and places it in `resultsDir`.

    Raises UnsafePathError when the rendered name would land anywhere else.
    """
    return resolveInside(resultsDir, renderArchiveName(template, manifest))
