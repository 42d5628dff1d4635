"""CLI for dotlink - back up, link and install a dotfiles repository."""

import argparse
import json
import platform
import sys
from pathlib import Path

from . import __version__
from .console import Console
from .errors import DotlinkError
from .runtime import Runtime, build_runtime
from .stow.models import RunReport
from .system.packages import install_aur, install_pacman
from .system.services import enable_services

EPILOG = """\
Notes:
- Edit stow.packages / packages.pacman / packages.aur in dotlink.toml.
- Put link packages in: <repo>/<package-name>/...
"""


def _print_report(report: RunReport, console: Console) -> None:
    """Print a one-line summary per package."""
    for result in report.results:
        if result.status == "skipped":
            line = f"{result.name}: skipped ({result.reason})"
        elif result.status == "unlinked":
            line = f"{result.name}: removed {result.removed} link(s)"
        elif result.status == "clean":
            line = f"{result.name}: no conflicts"
        else:
            line = (
                f"{result.name}: {result.status}, "
                f"{result.linked} new, {result.unchanged} unchanged"
            )
            if result.conflicts:
                line += f", {len(result.conflicts)} conflict(s)"
        console.info(f"  {line}")


def cmd_backup(args: argparse.Namespace, rt: Runtime) -> RunReport:
    """Detect conflicts and save logs without linking."""
    packages = rt.config.select(args.only)
    return rt.installer.backup(packages)


def cmd_packages(args: argparse.Namespace, rt: Runtime) -> None:
    """Install pacman and AUR packages."""
    install_pacman(rt.config.packages, rt.console)
    install_aur(rt.config.packages, rt.console)


def cmd_stow(args: argparse.Namespace, rt: Runtime) -> RunReport:
    """Link configured packages."""
    packages = rt.config.select(args.only)
    return rt.installer.stow(packages)


def cmd_unstow(args: argparse.Namespace, rt: Runtime) -> RunReport:
    """Remove links pointing back into configured packages."""
    packages = rt.config.select(args.only)
    return rt.installer.unstow(packages)


def cmd_services(args: argparse.Namespace, rt: Runtime) -> None:
    """Enable services and run reload commands."""
    enable_services(rt.config.services, rt.console)


def version_string() -> str:
    return (
        f"dotlink {__version__} "
        f"(python {platform.python_version()}, platform {platform.system().lower()})"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotlink",
        description="Back up, link and install a dotfiles repository",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=version_string()
    )

    actions = parser.add_argument_group("actions")
    actions.add_argument(
        "--all", action="store_true", help="Install packages + stow + services"
    )
    actions.add_argument(
        "--packages", action="store_true", help="Install pacman/AUR packages"
    )
    actions.add_argument(
        "--stow", action="store_true", help="Stow configured packages"
    )
    actions.add_argument(
        "--services", action="store_true", help="Enable services (e.g., keyd)"
    )
    actions.add_argument(
        "--backup", action="store_true",
        help="Detect possible stow conflicts and save logs",
    )
    actions.add_argument(
        "--unstow", action="store_true",
        help="Remove links that point back into configured packages",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/dotlink.toml, repo/dotlink.toml)",
    )
    parser.add_argument(
        "--repo", type=Path, default=None,
        help="Dotfiles repository root (overrides config)",
    )
    parser.add_argument(
        "--target", type=Path, default=None,
        help="Home target directory (overrides config)",
    )
    parser.add_argument(
        "--backup-dir", dest="backup_dir", type=Path, default=None,
        help="Directory receiving timestamped conflict logs (overrides config)",
    )
    parser.add_argument(
        "--only", action="append", default=[], metavar="NAME",
        help="Restrict link steps to this package (repeatable)",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Print link changes without writing"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print run reports as JSON"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    # Unknown options exit here, before anything touches the filesystem
    args = parser.parse_args(argv)

    if args.all:
        args.packages = args.stow = args.services = True

    if not any((args.backup, args.packages, args.stow, args.unstow, args.services)):
        parser.print_help()
        sys.exit(0)

    try:
        rt = build_runtime(
            config_path=args.config,
            repo_path=args.repo,
            target_path=args.target,
            backup_dir=args.backup_dir,
            quiet=args.quiet or args.json,
            dry_run=args.dry_run,
            json_output=args.json,
        )
    except DotlinkError as e:
        Console(colors=False).error(str(e))
        sys.exit(1)

    for name in rt.config.unknown(args.only):
        rt.console.warn(f"Unknown package: {name}")

    reports: list[RunReport] = []
    try:
        if args.backup:
            reports.append(cmd_backup(args, rt))
        if args.packages:
            cmd_packages(args, rt)
        if args.stow:
            reports.append(cmd_stow(args, rt))
        if args.unstow:
            reports.append(cmd_unstow(args, rt))
        if args.services:
            cmd_services(args, rt)
    except (DotlinkError, OSError) as e:
        rt.console.error(str(e))
        sys.exit(1)

    if args.json:
        print(json.dumps([r.to_dict() for r in reports], indent=2))
    else:
        for report in reports:
            rt.console.step(f"Summary ({report.action})")
            _print_report(report, rt.console)
            if report.backup_dir is not None and report.by_status("conflicted"):
                rt.console.info(f"  Conflict logs: {report.backup_dir}")
        rt.console.step("Done.")

    sys.exit(0)


if __name__ == "__main__":
    main()
