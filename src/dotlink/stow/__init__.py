"""Conflict-aware link installation."""

from .backup import BackupRecord
from .installer import Installer
from .models import Conflict, LinkEntry, LinkPlan, PackageResult, RunReport
from .plan import detect_conflicts, plan_links

__all__ = [
    "BackupRecord",
    "Installer",
    "Conflict",
    "LinkEntry",
    "LinkPlan",
    "PackageResult",
    "RunReport",
    "detect_conflicts",
    "plan_links",
]
