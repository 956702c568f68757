# modpacker/app/settings.py
from __future__ import annotations
import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import json5
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from modpacker.core.errors import SettingsError

import logging
logger = logging.getLogger(__name__)

__all__ = [
    "SETTINGS_FILE_NAME", "LOG_LEVEL_NAMES", "PathSettings", "BuildSettings",
    "SettingsLoad", "normalizeLocale", "validateLogLevel", "deepMerge",
    "loadSettings", "writeSettings",
]


SETTINGS_FILE_NAME = "cofg.json"
LOG_LEVEL_NAMES: tuple[str, ...] = ("warn", "info", "debug", "trace")

_LOCALE_ALIASES: dict[str, str] = {
    "zh_cn": "zh_cn", "zh-cn": "zh_cn", "cn": "zh_cn", "zh": "zh_cn",
    "zh_tw": "zh_tw", "zh-tw": "zh_tw", "tw": "zh_tw",
    "en": "en", "en_us": "en", "en-us": "en",
}



def _defaultTscCommand() -> list[str]:
    # npm installs a .cmd shim on Windows
    return ["tsc.cmd"] if os.name == "nt" else ["tsc"]



class PathSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    tmp_path: str = "./tmp"             # Disposable working copies of every mod
    results_path: str = "./results"     # Archives end up here
    mods_path: str = "./mods"           # Mod sources, never modified



class BuildSettings(BaseModel):
    """
    Settings for one build run. Built once at startup and passed explicitly to
    every component that needs them.
    """
    model_config = ConfigDict(extra="ignore")

    locale: str = "en"
    loglv: str = "info"
    path: PathSettings = Field(default_factory=PathSettings)
    pause: bool = True
    ts_process: bool = True
    file_name: str = "{name}.mod.zip"
    compression: Literal["stored", "deflated"] = "deflated"
    tsc_command: list[str] = Field(default_factory=_defaultTscCommand)
    log_file: str | None = None



@dataclass(slots=True)
class SettingsLoad:
    """Result of loading settings; warnings are (messageKey, kwargs) pairs for the message catalog."""
    settings: BuildSettings
    path: Path
    fileExisted: bool
    persisted: BuildSettings
    warnings: list[tuple[str, dict[str, Any]]] = field(default_factory=list)



def normalizeLocale(value: str) -> str | None:
    """Canonical locale for `value`, or None when it is not recognized."""
    return _LOCALE_ALIASES.get(str(value).strip().lower())



def validateLogLevel(value: str) -> bool:
    return value in LOG_LEVEL_NAMES



def deepMerge(first: Any, second: Any) -> Any:
    """
    Returns a new value where keys from `second` override/extend `first`.
    Only merges recursively when BOTH sides are mappings.
    For all other types the right-hand value `second` replaces `first`.
    """
    if isinstance(first, Mapping) and isinstance(second, Mapping):
        out: dict[str, Any] = dict(first)
        for key, value in second.items():
            if key in out:
                out[key] = deepMerge(out[key], value)
            else:
                out[key] = value
        return out

    return second



def _normalize(settings: BuildSettings, warnings: list[tuple[str, dict[str, Any]]]) -> BuildSettings:
    locale = normalizeLocale(settings.locale)
    if locale is None:
        warnings.append(("config.invalid_locale", {"value": settings.locale}))
        locale = "en"
    loglv = settings.loglv
    if not validateLogLevel(loglv):
        warnings.append(("config.invalid_log_level", {"value": loglv}))
        loglv = "info"
    return settings.model_copy(update={"locale": locale, "loglv": loglv})



def _validate(data: Mapping[str, Any], source: Path) -> BuildSettings:
    try:
        return BuildSettings.model_validate(data)
    except ValidationError as err:
        raise SettingsError(f"Invalid settings in '{source}': {err}") from err



def loadSettings(path: str | Path = SETTINGS_FILE_NAME, overrides: Mapping[str, Any] | None = None) -> SettingsLoad:
    """
    Loads settings from a JSON (or JSON5) file merged over the defaults, then
    applies command-line `overrides` on top.

    A missing file means "all defaults". Unreadable or malformed files raise SettingsError.
    Unknown locale / log level values fall back to "en" / "info" with a warning.
    """
    settingsPath = Path(path)
    warnings: list[tuple[str, dict[str, Any]]] = []
    fileData: Any = {}
    fileExisted = settingsPath.exists()

    if fileExisted:
        try:
            fileData = json5.loads(settingsPath.read_text(encoding="utf-8"))
        except OSError as err:
            raise SettingsError(f"Cannot read settings '{settingsPath}': {err}") from err
        except ValueError as err:
            raise SettingsError(f"Failed to parse '{settingsPath}': {err}") from err
        if not isinstance(fileData, Mapping):
            raise SettingsError(f"Settings file '{settingsPath}' must contain an object")

    defaults = BuildSettings().model_dump()
    persisted = _normalize(_validate(deepMerge(defaults, fileData), settingsPath), warnings)

    settings = persisted
    if overrides:
        merged = deepMerge(persisted.model_dump(), dict(overrides))
        settings = _normalize(_validate(merged, settingsPath), warnings)

    return SettingsLoad(
        settings=settings,
        path=settingsPath,
        fileExisted=fileExisted,
        persisted=persisted,
        warnings=warnings,
    )



def writeSettings(settings: BuildSettings, path: str | Path = SETTINGS_FILE_NAME) -> bool:
    """Writes `settings` as indented JSON. Failures are logged, never raised."""
    settingsPath = Path(path)
    try:
        text = json.dumps(settings.model_dump(mode="json"), ensure_ascii=False, indent=2)
        settingsPath.write_text(text + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as err:
        logger.warning("Failed to write settings '%s': %s", settingsPath, err)
        return False
    return True
