"""Apply phase: create links for a plan."""

from ..console import Console
from ..ports import LinkFs
from .models import ApplyOutcome, Conflict, LinkPlan
from .plan import classify_entry, is_in_place, link_target_for


def apply_plan(
    plan: LinkPlan,
    fs: LinkFs,
    conflicts: list[Conflict] | None = None,
    dry_run: bool = False,
    console: Console | None = None,
) -> ApplyOutcome:
    """
    Create a link for every planned entry that has no outstanding conflict.

    Destinations named in ``conflicts`` are skipped, and so is anything that
    appeared at a destination since conflicts were detected. Links already
    in place are left alone, so re-applying a plan is a no-op.

    Args:
        plan: Plan to apply
        fs: Filesystem adapter performing the mutations
        conflicts: Conflicts detected for this plan in the current run
        dry_run: If True, print the actions instead of performing them
        console: Where dry-run actions are printed (default: stdout)

    Returns:
        ApplyOutcome listing created, unchanged and skipped destinations
    """
    console = console or Console(colors=False)
    outcome = ApplyOutcome()
    blocked = {c.dest for c in conflicts or []}

    for entry in plan.entries:
        if entry.dest in blocked:
            outcome.skipped.append(entry.dest)
            continue

        if is_in_place(entry):
            outcome.unchanged.append(entry.dest)
            continue

        # Never overwrite, and never create directories over a file
        if classify_entry(entry, plan.target) is not None:
            outcome.skipped.append(entry.dest)
            continue

        link_target = link_target_for(entry)
        if dry_run:
            console.info(f"[DRY RUN] Would link: {entry.dest} -> {link_target}")
            outcome.created.append(entry.dest)
            continue

        fs.makedirs(entry.dest.parent)
        fs.symlink(link_target, entry.dest)
        outcome.created.append(entry.dest)

    return outcome
