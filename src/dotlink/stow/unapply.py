"""Remove links created from a package."""

from pathlib import Path

from ..console import Console
from ..ports import LinkFs
from .models import LinkPlan
from .plan import points_into


def unapply_plan(
    plan: LinkPlan,
    fs: LinkFs,
    dry_run: bool = False,
    console: Console | None = None,
) -> list[Path]:
    """
    Remove planned destinations that are links back into the package.

    Plain files, directories and links pointing anywhere else are left
    untouched. Directories created by apply are not pruned.

    Args:
        plan: Plan whose links should be removed
        fs: Filesystem adapter performing the mutations
        dry_run: If True, don't actually remove anything
        console: Where dry-run actions are printed (default: stdout)

    Returns:
        Destinations removed (or that would be removed)
    """
    console = console or Console(colors=False)
    removed = []
    for entry in reversed(plan.entries):
        if not points_into(entry.dest, plan.source_dir):
            continue
        if dry_run:
            console.info(f"[DRY RUN] Would remove: {entry.dest}")
        else:
            fs.unlink(entry.dest)
        removed.append(entry.dest)
    removed.reverse()
    return removed
