"""Runtime wiring helper for the CLI."""

import sys
from dataclasses import dataclass
from pathlib import Path

from .adapters.fs import LocalFs, SudoFs
from .config import DotlinkConfig, load_config, with_overrides
from .console import Console
from .stow.backup import BackupRecord
from .stow.installer import Installer


@dataclass
class Runtime:
    """Container for all wired components."""
    config: DotlinkConfig
    console: Console
    record: BackupRecord
    installer: Installer


def build_runtime(
    config_path: Path | None = None,
    repo_path: Path | None = None,
    target_path: Path | None = None,
    backup_dir: Path | None = None,
    quiet: bool = False,
    dry_run: bool = False,
    json_output: bool = False,
) -> Runtime:
    """Load configuration once and wire the installer."""
    config = load_config(config_path=config_path, repo_path=repo_path)
    config = with_overrides(config, repo=repo_path, target=target_path, backup_dir=backup_dir)

    # Keep stdout clean for machine-readable output
    out = sys.stderr if json_output else sys.stdout
    console = Console(colors=config.ui.colors and out.isatty(), quiet=quiet, out=out)
    record = BackupRecord.for_run(config.install.backup_dir)
    installer = Installer(
        repo=config.install.repo,
        record=record,
        console=console,
        ignore=config.stow.ignore,
        local_fs=LocalFs(),
        sudo_fs=SudoFs(),
        dry_run=dry_run,
    )

    return Runtime(config=config, console=console, record=record, installer=installer)
