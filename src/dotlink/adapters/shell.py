"""Thin wrappers over external commands."""

import shutil
import subprocess
from typing import Sequence

from ..errors import CommandError, MissingDependency


def have(tool: str) -> bool:
    return shutil.which(tool) is not None


def need(tool: str) -> None:
    """Abort the run if ``tool`` is not on PATH."""
    if not have(tool):
        raise MissingDependency(tool)


def run(cmd: Sequence[str], check: bool = True) -> int:
    """Run a command attached to the terminal and return its exit code.

    With ``check`` a non-zero exit raises ``CommandError``.
    """
    result = subprocess.run(list(cmd))
    if check and result.returncode != 0:
        raise CommandError(list(cmd), result.returncode)
    return result.returncode
