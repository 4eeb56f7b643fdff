"""Locate and load tasknc config files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, TextIO

from dotenv import load_dotenv

from tasknc.constants import DEFAULT_CONFIG_PATHS, ENV_CONFIG_VAR
from tasknc.parsing.dispatcher import CommandStatus, parse_line
from tasknc.parsing.errors import ConfigError
from tasknc.parsing.reader import iter_logical_lines
from tasknc.settings.store import SettingsStore
from tasknc.settings.version import VersionProvider

logger: Final = logging.getLogger(__name__)

# Load environment variables from .env file(s)
load_dotenv()


@dataclass
class LineError:
    """A config line that could not be applied."""

    lineno: int
    line: str
    error: ConfigError

    def __str__(self) -> str:
        return f"line {self.lineno}: {self.error}"


@dataclass
class ParseReport:
    """Summary of one pass over a config source."""

    source: str
    applied: int = 0
    empty: int = 0
    errors: list[LineError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every line was applied or empty."""
        return not self.errors


def locate_config_file(path: Path | None = None) -> Path | None:
    """Find the config file to load.

    Args:
        path: Explicit path; takes precedence over everything else

    Returns:
        Path of the config file, or None if none exists (defaults apply)

    Raises:
        FileNotFoundError: If an explicit or environment path is missing
    """
    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path

    env_path = os.environ.get(ENV_CONFIG_VAR)
    if env_path:
        path = Path(env_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file from {ENV_CONFIG_VAR} not found: {path}")
        return path

    for default_path in DEFAULT_CONFIG_PATHS:
        if default_path.exists():
            return default_path
    return None


def load_stream(store: SettingsStore, stream: TextIO, source: str = "<stream>") -> ParseReport:
    """Apply every line of a config stream to the store.

    Bad lines are logged and recorded in the report; they never stop the
    remaining lines from being applied.

    Args:
        store: Settings store to update
        stream: Readable text stream
        source: Name used in log messages

    Returns:
        Report of applied, empty and failed lines
    """
    report = ParseReport(source=source)
    for lineno, line in enumerate(iter_logical_lines(stream), start=1):
        try:
            status = parse_line(store, line)
        except ConfigError as err:
            logger.warning("%s:%d: %s", source, lineno, err.message)
            report.errors.append(LineError(lineno, line.rstrip("\n"), err))
            continue

        if status is CommandStatus.EMPTY:
            report.empty += 1
        else:
            report.applied += 1

    logger.debug(
        "%s: %d applied, %d empty, %d errors",
        source,
        report.applied,
        report.empty,
        len(report.errors),
    )
    return report


def load_file(store: SettingsStore, path: Path) -> ParseReport:
    """Apply a config file to the store.

    Bytes that are not valid UTF-8 are replaced with U+FFFD so one bad line
    cannot stop the rest of the file from loading.
    """
    with path.open(encoding="utf-8", errors="replace") as f:
        return load_stream(store, f, source=str(path))


def load_settings(
    path: Path | None = None,
    version_provider: VersionProvider | None = None,
    store: SettingsStore | None = None,
) -> tuple[SettingsStore, ParseReport | None]:
    """Build a settings store from defaults plus the located config file.

    Args:
        path: Explicit config file (optional, searches default locations if None)
        version_provider: Optional override for the task version lookup
        store: Existing store to load into (default: a new one with defaults)

    Returns:
        The store and the parse report, or None when no file was found
    """
    if store is None:
        store = SettingsStore(version_provider=version_provider)
    config_path = locate_config_file(path)
    if config_path is None:
        logger.debug("no config file found, using defaults")
        return store, None

    logger.info("loading config from %s", config_path)
    return store, load_file(store, config_path)
