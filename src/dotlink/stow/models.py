"""Data models for link planning and installation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Literal

from ..config import Package

ConflictReason = Literal["file", "directory", "foreign-link", "blocked-parent"]
# "clean" and "unlinked" are used by backup-only and unstow passes
PackageStatus = Literal["linked", "conflicted", "skipped", "clean", "unlinked"]


@dataclass(frozen=True)
class LinkEntry:
    """A single planned link."""

    source: Path  # Absolute path inside the package
    dest: Path  # Absolute path under the target root
    relpath: Path  # Path relative to the package root


@dataclass
class LinkPlan:
    """Every link a package would create."""

    package: Package
    source_dir: Path
    target: Path
    entries: list[LinkEntry] = field(default_factory=list)


@dataclass(frozen=True)
class Conflict:
    """A destination already occupied by something other than the planned link."""

    dest: Path
    reason: ConflictReason
    detail: str = ""


@dataclass
class ApplyOutcome:
    """What apply did for one plan."""

    created: list[Path] = field(default_factory=list)
    unchanged: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


@dataclass
class PackageResult:
    """Outcome of processing one package."""

    name: str
    status: PackageStatus
    linked: int = 0
    unchanged: int = 0
    removed: int = 0
    conflicts: list[Conflict] = field(default_factory=list)
    log_path: Path | None = None
    reason: str | None = None


@dataclass
class RunReport:
    """Aggregated results of a stow, backup or unstow pass."""

    action: Literal["stow", "backup", "unstow"]
    results: list[PackageResult] = field(default_factory=list)
    backup_dir: Path | None = None

    def by_status(self, status: PackageStatus) -> list[PackageResult]:
        return [r for r in self.results if r.status == status]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation."""
        def _plain(value: Any) -> Any:
            if isinstance(value, Path):
                return str(value)
            if isinstance(value, dict):
                return {k: _plain(v) for k, v in value.items()}
            if isinstance(value, list):
                return [_plain(v) for v in value]
            return value

        return {
            "action": self.action,
            "backup_dir": _plain(self.backup_dir),
            "results": [_plain(asdict(r)) for r in self.results],
        }
