import io
import logging
from pathlib import Path
from typing import Callable

import pytest

from tasknc import config as tasknc_config
from tasknc.config import load_file, load_settings, load_stream, locate_config_file
from tasknc.parsing import (
    ArgumentCountError,
    LogPathError,
    UnknownCommandError,
    UnknownKeyError,
)
from tasknc.settings import SettingsStore

SAMPLE_CONFIG = """\
# user config
set nc_timeout 500
set filter "status:pending"
set task_format "%3n (%-10p) %d"
"""

MIXED_CONFIG = """\
set sort due-

garbage here
set filter
set bogus 5
set filter "project:home +next"   # inbox
set nc_timeout 25x
"""


def test_sample_config(store: SettingsStore) -> None:
    report = load_stream(store, io.StringIO(SAMPLE_CONFIG))
    assert report.ok
    assert report.applied == 3
    assert report.empty == 1
    assert store.nc_timeout == 500
    assert store.filter == "status:pending"
    assert store.task_format == "%3n (%-10p) %d"


def test_bad_lines_do_not_abort(store: SettingsStore, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="tasknc.config"):
        report = load_stream(store, io.StringIO(MIXED_CONFIG), source="mixed")

    assert store.sort == "due-"
    assert store.filter == "project:home +next"
    assert store.nc_timeout == 25
    assert report.applied == 3
    assert report.empty == 1
    assert [e.lineno for e in report.errors] == [3, 4, 5]
    assert [type(e.error) for e in report.errors] == [
        UnknownCommandError,
        ArgumentCountError,
        UnknownKeyError,
    ]
    assert report.errors[2].line == "set bogus 5"
    assert str(report.errors[0]) == "line 3: [3] unrecognized command 'garbage'"
    assert not report.ok
    assert "mixed:5: unrecognized variable 'bogus'" in caplog.text


def test_later_lines_override_earlier(store: SettingsStore) -> None:
    load_stream(store, io.StringIO("set sort a\nset sort b\n"))
    assert store.sort == "b"


def test_logpath_failure_is_reported(store: SettingsStore, tmp_path: Path) -> None:
    text = f"set logpath {tmp_path / 'nope' / 'x.log'}\nset sort due\n"
    report = load_stream(store, io.StringIO(text))
    assert len(report.errors) == 1
    assert report.errors[0].error.code == 5
    assert store.log_handle is None
    assert store.sort == "due"


def test_logpath_with_nul_is_reported(store: SettingsStore) -> None:
    report = load_stream(store, io.StringIO('set logpath "a\x00b"\nset sort due\n'))
    assert [e.lineno for e in report.errors] == [1]
    assert isinstance(report.errors[0].error, LogPathError)
    assert isinstance(report.errors[0].error.original_error, ValueError)
    assert store.log_handle is None
    assert store.sort == "due"


def test_invalid_utf8_line_does_not_stop_file(
    store: SettingsStore, write_config: Callable[[str], Path]
) -> None:
    path = write_config("")
    path.write_bytes(b"set filter caf\xe9\nset sort due\n")
    report = load_file(store, path)
    assert report.ok
    assert report.applied == 2
    assert store.filter == "caf\ufffd"
    assert store.sort == "due"


def test_long_line_in_file(store: SettingsStore, write_config: Callable[[str], Path]) -> None:
    value = "q" * 10_000
    path = write_config(f'set filter "{value}"\nset sort n\n')
    report = load_file(store, path)
    assert report.ok
    assert store.filter == value


def test_locate_explicit_path(write_config: Callable[[str], Path]) -> None:
    path = write_config("")
    assert locate_config_file(path) == path


def test_locate_explicit_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        locate_config_file(tmp_path / "missing")


def test_locate_from_env(
    monkeypatch: pytest.MonkeyPatch, write_config: Callable[[str], Path]
) -> None:
    path = write_config("")
    monkeypatch.setenv("TASKNC_CONFIG", str(path))
    assert locate_config_file() == path


def test_locate_env_missing(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKNC_CONFIG", str(tmp_path / "missing"))
    with pytest.raises(FileNotFoundError):
        locate_config_file()


def test_locate_default_paths(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("TASKNC_CONFIG", raising=False)
    second = tmp_path / "second"
    second.write_text("")
    monkeypatch.setattr(tasknc_config, "DEFAULT_CONFIG_PATHS", [tmp_path / "first", second])
    assert locate_config_file() == second

    monkeypatch.setattr(tasknc_config, "DEFAULT_CONFIG_PATHS", [tmp_path / "first"])
    assert locate_config_file() is None


def test_load_settings(write_config: Callable[[str], Path]) -> None:
    path = write_config(SAMPLE_CONFIG)
    store, report = load_settings(path, version_provider=lambda: None)
    with store:
        assert report is not None and report.ok
        assert report.source == str(path)
        assert store.nc_timeout == 500


def test_load_settings_without_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("TASKNC_CONFIG", raising=False)
    monkeypatch.setattr(tasknc_config, "DEFAULT_CONFIG_PATHS", [tmp_path / "none"])
    store, report = load_settings(version_provider=lambda: None)
    assert report is None
    assert store.nc_timeout == 1000
