"""Plan phase: map package files to destinations and find conflicts."""

import fnmatch
import os
from pathlib import Path

from ..config import DEFAULT_IGNORE, Package
from .models import Conflict, LinkEntry, LinkPlan


def is_ignored(relpath: Path, ignore: tuple[str, ...]) -> bool:
    """
    Check a package-relative path against ignore globs.

    Globs containing a slash match the whole relative path; all others
    match any single path component.
    """
    rel = relpath.as_posix()
    for pattern in ignore:
        if "/" in pattern:
            if fnmatch.fnmatchcase(rel, pattern.lstrip("/")):
                return True
        elif any(fnmatch.fnmatchcase(part, pattern) for part in relpath.parts):
            return True
    return False


def plan_links(
    package: Package,
    source_root: Path,
    target_root: Path | None = None,
    ignore: tuple[str, ...] = DEFAULT_IGNORE,
) -> LinkPlan:
    """
    Enumerate every file under a package and map it under the target root.

    Directories are walked but never linked themselves. Symlinks inside the
    package (to files or directories) are planned like files.

    Args:
        package: Package to plan
        source_root: Dotfiles repository root containing the package directory
        target_root: Destination root (default: the package's own target)
        ignore: Globs of paths to leave out

    Returns:
        LinkPlan with entries in sorted order
    """
    source_dir = (source_root / package.name).absolute()
    target = (target_root or package.target).absolute()
    plan = LinkPlan(package=package, source_dir=source_dir, target=target)

    if not source_dir.is_dir():
        return plan

    for dirpath, dirnames, filenames in os.walk(source_dir):
        current = Path(dirpath)
        leaves = list(filenames)

        # Symlinked directories are linked as a whole, not descended into
        for name in list(dirnames):
            if (current / name).is_symlink():
                dirnames.remove(name)
                leaves.append(name)
        dirnames[:] = sorted(
            d for d in dirnames
            if not is_ignored((current / d).relative_to(source_dir), ignore)
        )

        for name in leaves:
            source = current / name
            rel = source.relative_to(source_dir)
            if is_ignored(rel, ignore):
                continue
            plan.entries.append(LinkEntry(source=source, dest=target / rel, relpath=rel))

    plan.entries.sort(key=lambda e: e.relpath.as_posix())
    return plan


def _real_parent(path: Path) -> Path:
    """Resolve every component except the last."""
    return path.parent.resolve() / path.name


def link_target_for(entry: LinkEntry) -> str:
    """Relative link text for an entry, computed against real paths."""
    return os.path.relpath(_real_parent(entry.source), entry.dest.parent.resolve())


def points_into(link: Path, directory: Path) -> bool:
    """Return True if ``link`` is a symlink whose target lies under ``directory``."""
    if not link.is_symlink():
        return False
    raw = Path(os.readlink(link))
    if not raw.is_absolute():
        raw = link.parent / raw
    try:
        _real_parent(raw).relative_to(directory.resolve())
    except ValueError:
        return False
    return True


def is_in_place(entry: LinkEntry) -> bool:
    """
    Return True if the destination already leads to the planned source.

    Covers a correct link at the destination as well as a destination
    reached through a parent directory that is itself linked into the
    package.
    """
    if not os.path.lexists(entry.dest):
        return False
    expected = _real_parent(entry.source)
    if _real_parent(entry.dest) == expected:
        return True
    if entry.dest.is_symlink():
        raw = Path(os.readlink(entry.dest))
        if not raw.is_absolute():
            raw = entry.dest.parent / raw
        return _real_parent(raw) == expected
    return False


def classify_entry(entry: LinkEntry, target: Path) -> Conflict | None:
    """Return the conflict at an entry's destination, or None if it is free or in place."""
    # A parent that exists but is not a directory blocks the whole path
    rel_parts = entry.dest.relative_to(target).parts
    ancestor = target
    for part in rel_parts[:-1]:
        ancestor = ancestor / part
        if not os.path.lexists(ancestor):
            break
        if not ancestor.is_dir():
            return Conflict(
                dest=entry.dest,
                reason="blocked-parent",
                detail=f"parent {ancestor} exists and is not a directory",
            )

    if not os.path.lexists(entry.dest):
        return None
    if is_in_place(entry):
        return None
    if entry.dest.is_symlink():
        return Conflict(
            dest=entry.dest,
            reason="foreign-link",
            detail=f"existing link to {os.readlink(entry.dest)}",
        )
    if entry.dest.is_dir():
        return Conflict(dest=entry.dest, reason="directory", detail="existing directory")
    return Conflict(dest=entry.dest, reason="file", detail="existing file")


def detect_conflicts(plan: LinkPlan) -> list[Conflict]:
    """Find planned destinations already occupied by something else. Read-only."""
    conflicts = []
    for entry in plan.entries:
        conflict = classify_entry(entry, plan.target)
        if conflict is not None:
            conflicts.append(conflict)
    return conflicts
