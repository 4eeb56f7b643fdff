"""Mutable settings store shared by the rest of the program."""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from types import TracebackType
from typing import Callable, Final, Sequence, TextIO

from pydantic import BaseModel, ConfigDict, Field

from tasknc.constants import (
    DEFAULT_DEBUG,
    DEFAULT_FILTER,
    DEFAULT_NC_TIMEOUT,
    DEFAULT_SORT,
    DEFAULT_TASK_FORMAT,
    KEY_FILTER,
    KEY_LOGPATH,
    KEY_NC_TIMEOUT,
    KEY_SORT,
    KEY_TASK_FORMAT,
)
from tasknc.parsing.errors import ArgumentCountError, LogPathError, UnknownKeyError
from tasknc.settings.version import TaskVersion, VersionProvider, task_version

logger: Final = logging.getLogger(__name__)

_LEADING_INT: Final = re.compile(r"\s*([+-]?\d+)")

# Sentinel for "version not fetched yet"; None means "fetched, unavailable"
_UNSET: Final = object()


def parse_int(text: str) -> int:
    """Parse the leading integer of a string, defaulting to 0.

    Mirrors ``sscanf("%d")``: leading whitespace and a sign are accepted and
    anything after the digits is ignored.

    Args:
        text: Raw value from a config line

    Returns:
        The parsed integer, or 0 when the text does not start with one
    """
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class SettingsValues(BaseModel):
    """Plain-valued settings with their defaults.

    Assignment is validated, so every setter is a single atomic replace.
    """

    model_config = ConfigDict(validate_assignment=True)

    debug: bool = Field(DEFAULT_DEBUG, description="Enable debug output")
    nc_timeout: int = Field(
        DEFAULT_NC_TIMEOUT, description="Polling timeout for the list window (ms)"
    )
    filter: str = Field(DEFAULT_FILTER, description="Task filter expression")
    sort: str = Field(DEFAULT_SORT, description="Task sort keys")
    task_format: str = Field(
        DEFAULT_TASK_FORMAT, description="printf-style format for one task line"
    )


class SettingsStore:
    """Current configuration of a tasknc run.

    Holds the plain values, the optional log file handle and the lazily
    fetched task version. The store owns the log handle: it is closed when
    replaced by a new ``logpath`` or when the store is closed, never twice.

    Examples:
        with SettingsStore() as store:
            store.set_option("nc_timeout", "500")
            store.dump()
    """

    def __init__(
        self,
        values: SettingsValues | None = None,
        version_provider: VersionProvider | None = None,
    ) -> None:
        """Initialize the store with defaults.

        Args:
            values: Optional initial values (default: built-in defaults)
            version_provider: Callable returning the task version
        """
        self._values = values if values is not None else SettingsValues()
        self._version_provider = version_provider or task_version
        self._version: TaskVersion | None | object = _UNSET
        self._log_handle: TextIO | None = None
        self._logpath: Path | None = None

    # ---- read-only accessors ----
    @property
    def debug(self) -> bool:
        return self._values.debug

    @property
    def nc_timeout(self) -> int:
        return self._values.nc_timeout

    @property
    def filter(self) -> str:
        return self._values.filter

    @property
    def sort(self) -> str:
        return self._values.sort

    @property
    def task_format(self) -> str:
        return self._values.task_format

    @property
    def log_handle(self) -> TextIO | None:
        """Open log stream, or None if no usable ``logpath`` is set."""
        return self._log_handle

    @property
    def logpath(self) -> Path | None:
        return self._logpath

    @property
    def version(self) -> TaskVersion | None:
        """Task version, fetched from the provider on first access only."""
        if self._version is _UNSET:
            self._version = self._version_provider()
            logger.debug("task version: %s", self._version)
        return self._version  # type: ignore[return-value]

    # ---- setters ----
    def set_debug(self, debug: bool) -> None:
        self._values.debug = debug

    def set_nc_timeout(self, timeout: int) -> None:
        self._values.nc_timeout = timeout

    def set_filter(self, filter_: str) -> None:
        self._values.filter = filter_

    def set_sort(self, sort: str) -> None:
        self._values.sort = sort

    def set_task_format(self, task_format: str) -> None:
        self._values.task_format = task_format

    def set_logpath(self, path: str | Path) -> None:
        """Close the current log file and open ``path`` for append.

        Args:
            path: File to log to

        Raises:
            LogPathError: If the file cannot be opened; the store is then
                left without a log handle
        """
        self._close_log()
        try:
            self._log_handle = open(path, "a", encoding="utf-8")
        except (OSError, ValueError) as exc:
            raise LogPathError(str(path), exc) from exc
        self._logpath = Path(path)
        logger.debug("logging to %s", self._logpath)

    def set_option(self, key: str, value: str) -> None:
        """Apply one ``key value`` pair from a config line.

        Args:
            key: Variable name, matched case-sensitively
            value: Raw string value, converted according to the key

        Raises:
            UnknownKeyError: If the key is not recognized
            LogPathError: If ``logpath`` cannot be opened
        """
        setter = KEY_SETTERS.get(key)
        if setter is None:
            raise UnknownKeyError(key)
        setter(self, value)

    def apply_set(self, args: Sequence[str]) -> None:
        """Handle the arguments of a ``set`` command.

        Raises:
            ArgumentCountError: Unless exactly two arguments are given
        """
        if len(args) != 2:
            raise ArgumentCountError("set", expected=2, received=len(args))
        key, value = args
        self.set_option(key, value)

    # ---- output ----
    def dump_items(self) -> list[tuple[str, str]]:
        """Render current values as ``(name, text)`` pairs in display order.

        The version line is only present when a version is known.
        """
        items = [
            ("debug", str(self.debug).lower()),
            ("nc_timeout", str(self.nc_timeout)),
        ]
        if self.version is not None:
            items.append(("version", str(self.version)))
        items += [
            ("filter", f"'{self.filter}'"),
            ("sort", f"'{self.sort}'"),
            ("task_format", f"'{self.task_format}'"),
        ]
        return items

    def dump(self, out: TextIO | None = None) -> None:
        """Write every setting as a ``name: value`` line.

        Args:
            out: Destination stream (default: stdout)
        """
        if out is None:
            out = sys.stdout
        for name, text in self.dump_items():
            out.write(f"{name}: {text}\n")

    # ---- lifecycle ----
    def _close_log(self) -> None:
        handle, self._log_handle = self._log_handle, None
        self._logpath = None
        if handle is not None:
            handle.close()

    def close(self) -> None:
        """Release the log handle. Safe to call more than once."""
        self._close_log()

    def __enter__(self) -> SettingsStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


# Variable name -> setter taking the raw string value
KEY_SETTERS: Final[dict[str, Callable[[SettingsStore, str], None]]] = {
    KEY_NC_TIMEOUT: lambda store, value: store.set_nc_timeout(parse_int(value)),
    KEY_LOGPATH: SettingsStore.set_logpath,
    KEY_FILTER: SettingsStore.set_filter,
    KEY_SORT: SettingsStore.set_sort,
    KEY_TASK_FORMAT: SettingsStore.set_task_format,
}
