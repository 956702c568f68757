# modpacker/tools/tsc.py
from __future__ import annotations
import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from modpacker.mods.discover import findTypeScriptProjects

logger = logging.getLogger(__name__)

__all__ = ["CompileResult", "compileProject", "compileProjects"]



@dataclass(frozen=True, slots=True)
class CompileResult:
    projectDir: Path
    returnCode: int | None      # None when the compiler could not be started
    output: str
    launched: bool = True

    @property
    def ok(self) -> bool:
        return self.launched and self.returnCode == 0



def compileProject(projectDir: Path, command: Sequence[str]) -> CompileResult:
    """Runs `<command> -p <projectDir>` and blocks until the compiler exits."""
    args = [*command, "-p", str(projectDir)]
    logger.debug("Running %s", " ".join(args))
    try:
        completed = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as err:
        return CompileResult(projectDir=projectDir, returnCode=None, output=str(err), launched=False)
    return CompileResult(projectDir=projectDir, returnCode=completed.returncode, output=completed.stdout or "")



def compileProjects(root: str | Path, command: Sequence[str]) -> list[CompileResult]:
    """Compiles every mod folder under `root` that contains TypeScript sources, one at a time."""
    return [compileProject(projectDir, command) for projectDir in findTypeScriptProjects(root)]
