"""tasknc command-line interface.

This module provides the command-line entry points for inspecting the
tasknc configuration: dumping the effective settings, printing the task
version and validating config files.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Final

import typer

from tasknc.config import load_file, load_settings
from tasknc.settings.store import SettingsStore

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="tasknc configuration CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "tasknc.cli"

LOG_FORMAT: Final = "%(asctime)s [%(levelname)s] %(message)s"

# Options shared by commands
CONFIG_OPTION = typer.Option(
    None, "--config", "-c", exists=True, dir_okay=False, help="Config file to load"
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
FILTER_OPTION = typer.Option(None, "--filter", "-f", help="Set the task list filter")
SORT_OPTION = typer.Option(None, "--sort", "-s", help="Set the task list sort mode")
FILE_ARGUMENT = typer.Argument(..., exists=True, dir_okay=False, help="Config file")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )


class StoreLogHandler(logging.Handler):
    """Write log records to whatever ``logpath`` the store currently has open.

    The handle is looked up per record, so records emitted while the config
    file is still loading reach a ``logpath`` set on an earlier line.
    """

    def __init__(self, store: SettingsStore) -> None:
        super().__init__()
        self.store = store

    def emit(self, record: logging.LogRecord) -> None:
        handle = self.store.log_handle
        if handle is None:
            return
        try:
            handle.write(self.format(record) + "\n")
            handle.flush()
        except Exception:
            self.handleError(record)


@contextmanager
def _settings_session(config: Path | None) -> Iterator[SettingsStore]:
    """Load settings with tasknc logs mirrored to the configured ``logpath``."""
    handler = StoreLogHandler(SettingsStore())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    pkg_logger = logging.getLogger("tasknc")
    pkg_logger.addHandler(handler)
    try:
        with handler.store as store:
            try:
                load_settings(config, store=store)
            except FileNotFoundError as exc:
                typer.secho(str(exc), fg=typer.colors.RED, err=True)
                raise typer.Exit(code=1) from exc
            yield store
    finally:
        pkg_logger.removeHandler(handler)


@app.command()
def dump(
    config: Path | None = CONFIG_OPTION,
    filter_: str | None = FILTER_OPTION,
    sort: str | None = SORT_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Dump the configuration settings.

    Command-line values are applied after the config file, so they win.
    """
    _configure_logging(debug)
    with _settings_session(config) as store:
        if debug:
            store.set_debug(True)
        if filter_ is not None:
            store.set_filter(filter_)
        if sort is not None:
            store.set_sort(sort)
        store.dump(sys.stdout)


@app.command()
def version(config: Path | None = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Print the installed task version."""
    _configure_logging(debug)
    with _settings_session(config) as store:
        task_version = store.version
    if task_version is None:
        typer.secho("Unable to determine task version", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(f"task version: {task_version}")


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path = FILE_ARGUMENT):
    """Check every line of a config file and report the bad ones."""
    with SettingsStore(version_provider=lambda: None) as store:
        report = load_file(store, file)

    if not report.ok:
        typer.secho(f"Config error(s) in {file}:", fg=typer.colors.RED, err=True)
        for line_error in report.errors:
            typer.secho(f"  • {line_error}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"✅ Config valid ({report.applied} settings)")


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
