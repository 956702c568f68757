# modpacker/pipeline.py
from __future__ import annotations
import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from modpacker.app.settings import BuildSettings
from modpacker.core.errors import (
    ManifestIOError, ManifestSerializeError, ModPackerError, PreconditionError,
)
from modpacker.core.logging import clearLogContext, getModLogger, setLogContext
from modpacker.localization.messages import MessageCatalog
from modpacker.mods.constants import MANIFEST_FILE_NAME
from modpacker.mods.discover import discoverModDirs
from modpacker.mods.manifest import loadManifest, saveManifest
from modpacker.mods.reconcile import reconcileFileLists
from modpacker.packs.builder import ArchiveOptions, buildPackage, resolveArchivePath
from modpacker.tools.mirror import mirrorTree
from modpacker.tools.tsc import CompileResult, compileProjects

logger = logging.getLogger(__name__)

__all__ = ["ModBuildOutcome", "BuildReport", "prepareDirectories", "BuildPipeline"]



@dataclass(slots=True)
class ModBuildOutcome:
    modDir: Path
    ok: bool = False
    name: str | None = None
    archivePath: Path | None = None
    added: int = 0
    pruned: int = 0
    manifestSaved: bool = False
    error: ModPackerError | None = None



@dataclass(slots=True)
class BuildReport:
    outcomes: list[ModBuildOutcome] = field(default_factory=list)
    compileResults: list[CompileResult] = field(default_factory=list)

    @property
    def okCount(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> list[ModBuildOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]



def _resetDir(path: Path) -> None:
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True)



def prepareDirectories(settings: BuildSettings) -> None:
    """
    Clears and recreates the tmp and results directories and makes sure the
    mods directory exists. Any failure here is fatal for the whole run.
    """
    paths = settings.path
    try:
        for target in (Path(paths.tmp_path), Path(paths.results_path)):
            _resetDir(target)
        Path(paths.mods_path).mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise PreconditionError(f"Cannot prepare build directories: {err}") from err



class BuildPipeline:
    """
    Runs copy → (optional) TypeScript compile → reconcile → prune → archive
    for every mod folder, one mod at a time.

    Mods are processed in the tmp copy, so the sources under mods_path are
    never touched. A failure in one mod is logged and the next mod is processed.
    """

    def __init__(self, settings: BuildSettings, messages: MessageCatalog | None = None) -> None:
        self.settings = settings
        self.messages = messages or MessageCatalog(settings.locale)
        self.modsDir = Path(settings.path.mods_path)
        self.tmpDir = Path(settings.path.tmp_path)
        self.resultsDir = Path(settings.path.results_path)
        self.archiveOptions = ArchiveOptions(compression=settings.compression)

    def run(self) -> BuildReport:
        """Raises PreconditionError when the run cannot start; per-mod failures end up in the report."""
        report = BuildReport()
        prepareDirectories(self.settings)

        logger.info(self.messages.t("mirror.start", src=self.modsDir, dst=self.tmpDir))
        try:
            mirrorTree(self.modsDir, self.tmpDir)
        except OSError as err:
            raise PreconditionError(f"Cannot copy '{self.modsDir}' to '{self.tmpDir}': {err}") from err

        if self.settings.ts_process:
            report.compileResults = self._compileTypeScript()

        for modDir in discoverModDirs(self.tmpDir):
            report.outcomes.append(self.processMod(modDir))

        logger.info(self.messages.t(
            "run.summary",
            ok=report.okCount,
            total=len(report.outcomes),
            results=self.resultsDir,
        ))
        return report

    def _compileTypeScript(self) -> list[CompileResult]:
        logger.info(self.messages.t("ts.start"))
        results = compileProjects(self.tmpDir, self.settings.tsc_command)
        if not results:
            logger.info(self.messages.t("ts.none"))
        for result in results:
            project = result.projectDir.name
            if not result.launched:
                logger.warning(self.messages.t("ts.launch_failed", project=project, error=result.output))
            elif result.ok:
                logger.info(self.messages.t("ts.compiled", project=project))
            else:
                logger.warning(self.messages.t("ts.failed", project=project, code=result.returnCode, output=result.output.strip()))
        logger.info(self.messages.t("ts.done"))
        return results

    def processMod(self, modDir: Path) -> ModBuildOutcome:
        """Reconciles, persists, prunes and archives one working copy."""
        outcome = ModBuildOutcome(modDir=modDir)
        manifestPath = modDir / MANIFEST_FILE_NAME
        setLogContext(modDir=modDir.name)
        try:
            logger.info(self.messages.t("mod.start", modDir=modDir))
            try:
                manifest = loadManifest(manifestPath)
            except ModPackerError as err:
                logger.error(self.messages.t("mod.manifest_failed", path=manifestPath, error=err))
                outcome.error = err
                return outcome

            outcome.name = manifest.name
            setLogContext(modName=manifest.name)
            modLogger = getModLogger(manifest.name, traceEnabled=self.settings.loglv == "trace")

            try:
                outcome.added = reconcileFileLists(manifest, modDir)
            except ModPackerError as err:
                logger.error(self.messages.t("mod.reconcile_failed", path=modDir, error=err))
                outcome.error = err
                return outcome
            logger.info(self.messages.t("mod.reconciled", path=manifestPath, added=outcome.added))
            modLogger.trace("Manifest after reconciliation: %s", manifest.model_dump())

            try:
                saveManifest(manifest, manifestPath)
                outcome.manifestSaved = True
            except (ManifestIOError, ManifestSerializeError) as err:
                logger.warning(self.messages.t("mod.save_failed", path=manifestPath, error=err))

            try:
                archivePath = resolveArchivePath(self.resultsDir, self.settings.file_name, manifest)
                if archivePath.exists():
                    logger.warning("Archive '%s' already exists and will be replaced", archivePath)
                result = buildPackage(modDir, manifest, archivePath, self.archiveOptions)
            except ModPackerError as err:
                logger.error(self.messages.t("mod.package_failed", path=modDir, error=err))
                outcome.error = err
                return outcome

            outcome.ok = True
            outcome.archivePath = result.outputPath
            outcome.pruned = len(result.pruned.deletedFiles)
            logger.info(self.messages.t("mod.packaged", name=manifest.name, archive=archivePath, files=result.fileCount))
            return outcome
        finally:
            clearLogContext()
