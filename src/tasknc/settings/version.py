"""Taskwarrior version lookup."""

from __future__ import annotations

import logging
import re
import subprocess
from typing import Callable, Final, NamedTuple, Optional

from tasknc.constants import TASK_VERSION_COMMAND, TASK_VERSION_TIMEOUT

logger: Final = logging.getLogger(__name__)

_VERSION_RE: Final = re.compile(r"(\d+)\.(\d+)\.(\d+)")


class TaskVersion(NamedTuple):
    """Three-part version of the installed task binary."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, text: str) -> TaskVersion | None:
        """Extract the first ``X.Y.Z`` triple from text.

        Args:
            text: Output of ``task --version`` or similar

        Returns:
            Parsed version, or None if no triple is present
        """
        match = _VERSION_RE.search(text)
        if match is None:
            return None
        return cls(*(int(part) for part in match.groups()))


VersionProvider = Callable[[], Optional[TaskVersion]]


def task_version(
    command: list[str] | None = None, timeout: float = TASK_VERSION_TIMEOUT
) -> TaskVersion | None:
    """Ask the task binary for its version.

    Args:
        command: Command line to run (default: ``task --version``)
        timeout: Seconds to wait for the command

    Returns:
        The reported version, or None if it could not be determined
    """
    cmd = command or TASK_VERSION_COMMAND
    try:
        result = subprocess.run(
            cmd, capture_output=True, text=True, timeout=timeout, check=True
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("version lookup failed (%s): %s", " ".join(cmd), exc)
        return None

    version = TaskVersion.parse(result.stdout)
    if version is None:
        logger.debug("unparseable version output: %r", result.stdout)
    return version
