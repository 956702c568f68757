# modpacker/mods/manifest.py
from __future__ import annotations
import json
from os import PathLike
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from modpacker.core.errors import ManifestIOError, ManifestParseError, ManifestSerializeError
from modpacker.core.paths import normalizeSeparators
from modpacker.mods.constants import CATEGORY_FIELDS, DEFAULT_VERSION, MANIFEST_FILE_NAME


__all__ = [
    "AddonPluginParam", "AddonPlugin", "DependenceInfo",
    "BootManifest", "loadManifest", "saveManifest",
]



class AddonPluginParam(BaseModel):
    """A single find/replace instruction applied to a passage of the target mod."""
    model_config = ConfigDict(extra="ignore")

    passage: str
    findString: str
    replace: str



class AddonPlugin(BaseModel):
    model_config = ConfigDict(extra="ignore")

    modName: str                # Target mod name
    addonName: str
    modVersion: str             # Target mod version
    params: list[AddonPluginParam] = Field(default_factory=list)



class DependenceInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    modName: str
    version: str



class BootManifest(BaseModel):
    """
    In-memory boot.json of one mod.

    Field names are the literal keys of the on-disk format. Optional fields given
    as null or left out are resolved to their defaults right after parsing, so
    nothing downstream has to deal with missing lists.
    """
    model_config = ConfigDict(extra="ignore")

    name: str
    version: str = DEFAULT_VERSION
    additionFile: list[str] = Field(default_factory=list)     # README/License/source maps
    imgFileList: list[str] = Field(default_factory=list)
    scriptFileList: list[str] = Field(default_factory=list)
    tweeFileList: list[str] = Field(default_factory=list)     # Story scripts
    styleFileList: list[str] = Field(default_factory=list)
    addonPlugin: list[AddonPlugin] = Field(default_factory=list)
    dependenceInfo: list[DependenceInfo] = Field(default_factory=list)

    @field_validator("version", mode="before")
    @classmethod
    def _defaultVersion(cls, value: Any) -> Any:
        return DEFAULT_VERSION if value is None else value

    @field_validator(
        "additionFile", "imgFileList", "scriptFileList", "tweeFileList",
        "styleFileList", "addonPlugin", "dependenceInfo",
        mode="before",
    )
    @classmethod
    def _defaultList(cls, value: Any) -> Any:
        return [] if value is None else value

    def categoryLists(self) -> tuple[list[str], ...]:
        """The five file lists in membership order."""
        return tuple(getattr(self, field) for field in CATEGORY_FIELDS)

    def isMember(self, relativePath: str) -> bool:
        """
        True when `relativePath` belongs in the final package.

        The manifest file itself is always a member; any other path must appear
        (after separator normalization) in one of the category lists.
        """
        normalized = normalizeSeparators(relativePath)
        if normalized == MANIFEST_FILE_NAME:
            return True
        return any(normalized in fileList for fileList in self.categoryLists())



def loadManifest(path: str | PathLike[str]) -> BootManifest:
    """
    Reads and parses a boot.json file.

    Raises ManifestIOError when the file can't be read and ManifestParseError
    when it isn't a JSON object matching the manifest structure.
    """
    manifestPath = Path(path)
    try:
        raw = manifestPath.read_bytes()
    except OSError as err:
        raise ManifestIOError(manifestPath, err) from err

    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as err:
        raise ManifestParseError(manifestPath, str(err)) from err

    if not isinstance(data, dict):
        raise ManifestParseError(manifestPath, f"expected a JSON object, got {type(data).__name__}")

    try:
        return BootManifest.model_validate(data)
    except ValidationError as err:
        reasons = "; ".join(
            f"{'.'.join(str(loc) for loc in item['loc']) or '<root>'}: {item['msg']}"
            for item in err.errors()
        )
        raise ManifestParseError(manifestPath, reasons) from err



def saveManifest(manifest: BootManifest, path: str | PathLike[str]) -> None:
    """
    Writes `manifest` back to `path` as indented JSON, replacing the file.

    The document is fully encoded before the file is opened, so a manifest that
    can't be represented in UTF-8 leaves the existing file untouched.
    """
    manifestPath = Path(path)
    try:
        text = json.dumps(manifest.model_dump(mode="json"), ensure_ascii=False, indent=2)
        payload = (text + "\n").encode("utf-8")
    except (TypeError, ValueError) as err:
        # UnicodeEncodeError (lone surrogates) is a ValueError
        raise ManifestSerializeError(manifestPath, err) from err

    try:
        manifestPath.write_bytes(payload)
    except OSError as err:
        raise ManifestIOError(manifestPath, err) from err
