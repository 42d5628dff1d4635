"""Sequential driver: plan, detect, log, link, one package at a time."""

from pathlib import Path

from ..adapters.fs import LocalFs, SudoFs, fs_for
from ..config import Package
from ..console import Console
from .apply import apply_plan
from .backup import BackupRecord
from .models import LinkPlan, PackageResult, RunReport
from .plan import detect_conflicts, plan_links
from .unapply import unapply_plan


class Installer:
    """
    Processes link packages in order and aggregates a RunReport.

    Per package: PLANNED -> (CONFLICT_DETECTED -> LOGGED) | (NO_CONFLICT ->
    LINKED). Missing package directories are skipped with a warning.
    """

    def __init__(
        self,
        repo: Path,
        record: BackupRecord,
        console: Console,
        ignore: tuple[str, ...],
        local_fs: LocalFs | None = None,
        sudo_fs: SudoFs | None = None,
        dry_run: bool = False,
    ):
        self.repo = repo
        self.record = record
        self.console = console
        self.ignore = ignore
        self.local_fs = local_fs or LocalFs()
        self.sudo_fs = sudo_fs or SudoFs()
        self.dry_run = dry_run

    def _plan(self, package: Package) -> LinkPlan | None:
        if not (self.repo / package.name).is_dir():
            self.console.warn(f"Skipping missing package dir: {package.name}")
            return None
        return plan_links(package, self.repo, ignore=self.ignore)

    def _log_conflicts(self, plan: LinkPlan, result: PackageResult) -> None:
        name = plan.package.name
        if self.dry_run:
            self.console.warn(f"Conflicts detected for '{name}' ({len(result.conflicts)})")
        else:
            result.log_path = self.record.write(name, result.conflicts, plan.target)
            self.console.warn(f"Conflicts detected for '{name}'. See: {result.log_path}")
        for conflict in result.conflicts:
            self.console.info(f"  {conflict.dest}: {conflict.detail}")
        self.console.warn(
            "Tip: move conflicting files out of the way, or adopt them into your package."
        )

    def install_package(self, package: Package) -> PackageResult:
        """Link one package, logging any conflicts first."""
        plan = self._plan(package)
        if plan is None:
            return PackageResult(name=package.name, status="skipped", reason="missing package dir")

        conflicts = detect_conflicts(plan)
        result = PackageResult(
            name=package.name,
            status="conflicted" if conflicts else "linked",
            conflicts=conflicts,
        )
        if conflicts:
            self._log_conflicts(plan, result)

        fs = fs_for(package.privileged, self.local_fs, self.sudo_fs)
        outcome = apply_plan(plan, fs, conflicts, dry_run=self.dry_run, console=self.console)
        result.linked = len(outcome.created)
        result.unchanged = len(outcome.unchanged)
        return result

    def check_package(self, package: Package) -> PackageResult:
        """Detect conflicts and write a log, without linking anything."""
        plan = self._plan(package)
        if plan is None:
            return PackageResult(name=package.name, status="skipped", reason="missing package dir")

        conflicts = detect_conflicts(plan)
        if not conflicts:
            return PackageResult(name=package.name, status="clean")
        result = PackageResult(name=package.name, status="conflicted", conflicts=conflicts)
        self._log_conflicts(plan, result)
        return result

    def remove_package(self, package: Package) -> PackageResult:
        """Remove links pointing back into one package."""
        plan = self._plan(package)
        if plan is None:
            return PackageResult(name=package.name, status="skipped", reason="missing package dir")

        fs = fs_for(package.privileged, self.local_fs, self.sudo_fs)
        removed = unapply_plan(plan, fs, dry_run=self.dry_run, console=self.console)
        return PackageResult(name=package.name, status="unlinked", removed=len(removed))

    def stow(self, packages: tuple[Package, ...]) -> RunReport:
        report = RunReport(action="stow")
        for package in packages:
            self.console.step(f"Stowing {package.name} into: {package.target}")
            report.results.append(self.install_package(package))
        if self.record.created:
            report.backup_dir = self.record.root
        return report

    def backup(self, packages: tuple[Package, ...]) -> RunReport:
        self.console.step(f"Backing up conflicting dotfiles (if any) to: {self.record.root}")
        if not self.dry_run:
            self.record.ensure()
        report = RunReport(action="backup", backup_dir=self.record.root)
        for package in packages:
            report.results.append(self.check_package(package))
        return report

    def unstow(self, packages: tuple[Package, ...]) -> RunReport:
        report = RunReport(action="unstow")
        for package in packages:
            self.console.step(f"Unstowing {package.name} from: {package.target}")
            report.results.append(self.remove_package(package))
        return report
