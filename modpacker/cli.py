# modpacker/cli.py
"""
Command-line entry point.

Usage:
    python -m modpacker [--config cofg.json] [-i LOCALE] [-l LEVEL] [--tsp | --no-tsp] [-p | --no-pause]
"""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any

from modpacker import __version__
from modpacker.app.settings import SETTINGS_FILE_NAME, BuildSettings, loadSettings, writeSettings
from modpacker.core.errors import PreconditionError, SettingsError
from modpacker.core.logging import configureLogging
from modpacker.localization.messages import MessageCatalog
from modpacker.pipeline import BuildPipeline

logger = logging.getLogger(__name__)

__all__ = ["EXIT_SUCCESS", "EXIT_FAILURE", "createParser", "cliOverrides", "main"]


EXIT_SUCCESS = 0
EXIT_FAILURE = 1



def createParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modpacker",
        description="Reconcile boot.json manifests and package every mod folder into an archive.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c",
        default=SETTINGS_FILE_NAME,
        help=f"Settings file (default: ./{SETTINGS_FILE_NAME})",
    )
    parser.add_argument("--locale", "-i", default=None, help="Message language (en, zh_cn, zh_tw)")
    parser.add_argument("--loglv", "-l", default=None, help="Log level (warn, info, debug, trace)")
    parser.add_argument(
        "--tsp",
        dest="ts_process",
        action="store_true",
        default=None,
        help="Compile TypeScript sources before packaging",
    )
    parser.add_argument(
        "--no-tsp",
        dest="ts_process",
        action="store_false",
        help="Skip TypeScript compilation",
    )
    parser.add_argument(
        "--pause", "-p",
        dest="pause",
        action="store_true",
        default=None,
        help="Wait for Enter before exiting",
    )
    parser.add_argument(
        "--no-pause",
        dest="pause",
        action="store_false",
        help="Exit right away",
    )
    return parser



def cliOverrides(args: argparse.Namespace) -> dict[str, Any]:
    """Settings keys explicitly given on the command line."""
    overrides: dict[str, Any] = {}
    for key in ("locale", "loglv", "ts_process", "pause"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    return overrides



def _pause(settings: BuildSettings, messages: MessageCatalog) -> None:
    if settings.pause and sys.stdin is not None and sys.stdin.isatty():
        try:
            input(messages.t("pause.prompt"))
        except EOFError:
            pass



def main(argv: Sequence[str] | None = None) -> int:
    args = createParser().parse_args(argv)

    try:
        loaded = loadSettings(args.config, cliOverrides(args))
    except SettingsError as err:
        print(f"modpacker: {err}", file=sys.stderr)
        return EXIT_FAILURE

    settings = loaded.settings
    configureLogging(settings)
    messages = MessageCatalog(settings.locale)

    for key, params in loaded.warnings:
        logger.warning(messages.t(key, **params))

    # Keep the file in sync with the normalized values (and create it on first run)
    writeSettings(loaded.persisted, loaded.path)

    exitCode = EXIT_SUCCESS
    try:
        BuildPipeline(settings, messages).run()
    except PreconditionError as err:
        logger.error(messages.t("run.aborted", error=err))
        exitCode = EXIT_FAILURE

    _pause(settings, messages)
    return exitCode
