from collections.abc import Generator
from pathlib import Path
from typing import Callable

import pytest

from tasknc.settings import SettingsStore, TaskVersion


@pytest.fixture
def store() -> Generator[SettingsStore, None, None]:
    with SettingsStore(version_provider=lambda: TaskVersion(2, 6, 2)) as s:
        yield s


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    def _write(text: str) -> Path:
        path = tmp_path / "config"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
