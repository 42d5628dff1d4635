"""Filesystem adapters for applying links."""

import os
import subprocess
from pathlib import Path

from ..errors import CommandError, PrivilegeFailure
from ..ports import LinkFs
from .shell import need


class LocalFs:
    """Mutates the filesystem directly as the current user."""

    def makedirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def symlink(self, link_target: str, dest: Path) -> None:
        os.symlink(link_target, dest)

    def unlink(self, path: Path) -> None:
        path.unlink()


class SudoFs:
    """Performs the same mutations through sudo, for targets like /etc.

    Privilege is acquired lazily on the first mutation, so a read-only run
    (conflict detection, dry-run) never prompts for a password.
    """

    def __init__(self) -> None:
        self._acquired = False

    def acquire(self) -> None:
        if self._acquired:
            return
        need("sudo")
        if subprocess.run(["sudo", "-v"]).returncode != 0:
            raise PrivilegeFailure("Could not acquire elevated privilege via sudo")
        self._acquired = True

    def _sudo(self, *args: str) -> None:
        self.acquire()
        cmd = ["sudo", *args]
        result = subprocess.run(cmd)
        if result.returncode != 0:
            raise CommandError(cmd, result.returncode)

    def makedirs(self, path: Path) -> None:
        if not path.is_dir():
            self._sudo("mkdir", "-p", "--", str(path))

    def symlink(self, link_target: str, dest: Path) -> None:
        self._sudo("ln", "-s", "--", link_target, str(dest))

    def unlink(self, path: Path) -> None:
        self._sudo("rm", "-f", "--", str(path))


def fs_for(privileged: bool, local: LocalFs, sudo: SudoFs) -> LinkFs:
    """Pick the adapter for a package; root never needs sudo."""
    if privileged and os.geteuid() != 0:
        return sudo
    return local
