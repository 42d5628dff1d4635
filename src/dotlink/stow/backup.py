"""Conflict logs, one timestamped directory per run."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from .models import Conflict

TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"
HINT = (
    "Move conflicting files out of the way, or adopt them into the "
    "package, then re-run."
)


def render_log(package_name: str, conflicts: list[Conflict],
               target: Path | None = None) -> str:
    """Render the diagnostic record for one package as YAML."""
    data: dict[str, Any] = {
        "package": package_name,
        "detected_at": datetime.now(timezone.utc).isoformat(),
    }
    if target is not None:
        data["target"] = str(target)
    data["conflicts"] = [
        {"path": str(c.dest), "reason": c.reason, "detail": c.detail}
        for c in conflicts
    ]
    data["hint"] = HINT
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def backup(conflicts: list[Conflict], backup_root: Path, package_name: str,
           target: Path | None = None) -> Path:
    """
    Write ``backup_root/<package_name>.log`` describing the conflicts.

    Conflicting files themselves are never moved or deleted.

    Returns:
        Path of the written log
    """
    backup_root.mkdir(parents=True, exist_ok=True)
    log_path = backup_root / f"{package_name}.log"
    log_path.write_text(render_log(package_name, conflicts, target), encoding="utf-8")
    return log_path


class BackupRecord:
    """
    The backup directory of a single run.

    The directory name is the run's start time. It is only created on disk
    when ``ensure`` is called or the first log is written.
    """

    def __init__(self, root: Path):
        self.root = root

    @classmethod
    def for_run(cls, backup_dir: Path, now: datetime | None = None) -> "BackupRecord":
        stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
        root = backup_dir / stamp
        suffix = 0
        while root.exists():
            suffix += 1
            root = backup_dir / f"{stamp}.{suffix}"
        return cls(root)

    def ensure(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    @property
    def created(self) -> bool:
        return self.root.is_dir()

    def write(self, package_name: str, conflicts: list[Conflict],
              target: Path | None = None) -> Path:
        return backup(conflicts, self.root, package_name, target)

    def logs(self) -> list[Path]:
        if not self.root.is_dir():
            return []
        return sorted(self.root.glob("*.log"))
